"""Social/search preview checks for event pages.

Scores an event document out of 100 before it goes live and builds the
meta tags the public page will emit.
"""

import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from .config import PREVIEW_BASE_URL, SITE_NAME
from .models import PreviewIssue, PreviewValidationResult

MAX_SCORE = 100
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


@dataclass
class FieldCheck:
    field: str
    points: int
    message: str
    required: bool = False
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[re.Pattern] = None
    pattern_message: Optional[str] = None
    url_check: bool = False
    array_min_length: Optional[int] = None
    allowed_values: Optional[List[str]] = None


def _checks(event: dict) -> List[tuple]:
    """(check, value) pairs: essentials 50 pts, SEO 30 pts, location 20 pts."""
    location = event.get("location") or {}
    organizer = event.get("organizer") or {}
    description = event.get("seoDescription") or event.get("shortDescription")

    return [
        (FieldCheck("name", 10, "El nombre del evento es requerido para la vista previa",
                    required=True, max_length=60), event.get("name")),
        (FieldCheck("slug", 10, "El slug es requerido para generar la URL pública",
                    required=True, pattern=SLUG_PATTERN,
                    pattern_message="El slug solo puede contener letras minúsculas, números y guiones"),
         event.get("slug")),
        (FieldCheck("shortDescription", 10, "La descripción SEO es requerida para redes sociales",
                    required=True, max_length=160, min_length=50), description),
        (FieldCheck("mainImageUrl", 10, "La imagen principal es requerida para vista previa en redes sociales",
                    required=True, url_check=True), event.get("mainImageUrl")),
        (FieldCheck("startDate", 10, "La fecha de inicio es requerida para la información del evento",
                    required=True), event.get("startDate")),

        (FieldCheck("seoTitle", 8, "Título SEO optimizado mejora el CTR",
                    max_length=60, min_length=30), event.get("seoTitle") or event.get("name")),
        (FieldCheck("seoDescription", 8, "Descripción SEO optimizada mejora el CTR en Google",
                    max_length=160, min_length=120), description),
        (FieldCheck("seoKeywords", 7, "Keywords SEO ayudan en el posicionamiento",
                    array_min_length=3), event.get("seoKeywords")),
        (FieldCheck("schemaType", 7, "Tipo de Schema ayuda a Google a entender el contenido",
                    allowed_values=["MusicFestival", "MusicEvent"]), event.get("schemaType")),

        (FieldCheck("location.venue", 8, "El recinto es importante para la vista previa"),
         location.get("venue")),
        (FieldCheck("location.city", 6, "La ciudad es importante para la ubicación"),
         location.get("city")),
        (FieldCheck("organizer.name", 6, "El nombre del organizador añade credibilidad"),
         organizer.get("name")),
    ]


def validate_event_for_preview(event: dict) -> PreviewValidationResult:
    issues: List[PreviewIssue] = []
    score = 0

    for check, value in _checks(event):
        issue = _validate_field(check, value)
        if issue:
            issues.append(issue)
        else:
            score += check.points

    # Real-time preview bonus
    if event.get("name") and event.get("slug"):
        score += 5
    if event.get("mainImageUrl"):
        score += 5
    if event.get("seoDescription") or event.get("shortDescription"):
        score += 5
    if not event.get("slug"):
        issues.append(PreviewIssue(
            severity="error",
            field="realTimeUpdates",
            message="Sin slug, la URL no se puede actualizar en tiempo real",
        ))

    return PreviewValidationResult(
        is_valid=not any(i.severity == "error" for i in issues),
        score=min(score, MAX_SCORE),
        issues=issues,
        recommendations=_recommendations(event),
    )


def _validate_field(check: FieldCheck, value) -> Optional[PreviewIssue]:
    field = check.field

    if check.required and (not value or (isinstance(value, str) and not value.strip())):
        return PreviewIssue("error", field, check.message, current=value or "", expected="Requerido")

    if not value:
        return None

    if isinstance(value, str):
        if check.max_length and len(value) > check.max_length:
            return PreviewIssue(
                "warning", field,
                f"{field} es demasiado largo ({len(value)} caracteres). Máximo recomendado: {check.max_length}",
                current=len(value), expected=f"<= {check.max_length}",
            )
        if check.min_length and len(value) < check.min_length:
            return PreviewIssue(
                "warning", field,
                f"{field} es demasiado corto ({len(value)} caracteres). Mínimo recomendado: {check.min_length}",
                current=len(value), expected=f">= {check.min_length}",
            )
        if check.pattern and not check.pattern.fullmatch(value):
            return PreviewIssue(
                "error", field,
                check.pattern_message or f"{field} no cumple con el formato requerido",
                current=value, expected="Formato válido",
            )
        if check.url_check and not _is_url(value):
            return PreviewIssue(
                "error", field, f"{field} debe ser una URL válida",
                current=value, expected="URL válida",
            )

    if isinstance(value, list) and check.array_min_length and len(value) < check.array_min_length:
        return PreviewIssue(
            "warning", field,
            f"{field} debería tener al menos {check.array_min_length} elementos",
            current=len(value), expected=f">= {check.array_min_length}",
        )

    if check.allowed_values and value not in check.allowed_values:
        return PreviewIssue(
            "warning", field,
            f"{field} debería ser uno de: {', '.join(check.allowed_values)}",
            current=value, expected=" o ".join(check.allowed_values),
        )

    return None


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme and (parsed.netloc or parsed.path))


def _recommendations(event: dict) -> List[str]:
    recs = []
    if not event.get("seoTitle") and event.get("name"):
        recs.append("Considera agregar un título SEO personalizado para mejorar el CTR")
    if not event.get("seoDescription") and event.get("shortDescription"):
        recs.append("Considera agregar una descripción SEO personalizada")
    if not event.get("seoKeywords"):
        recs.append("Agrega palabras clave relevantes para mejorar el SEO")
    if event.get("mainImageUrl"):
        recs.append("Asegúrate de que la imagen tenga al menos 1200x630 píxeles para redes sociales")
    if not (event.get("organizer") or {}).get("name"):
        recs.append("Agregar información del organizador mejora la credibilidad")
    if not (event.get("location") or {}).get("venue"):
        recs.append("Agregar el recinto del evento es importante para los asistentes")
    recs.append("Prueba la vista previa en diferentes dispositivos para asegurar compatibilidad")
    recs.append("Verifica que todos los enlaces funcionen correctamente en la página pública")
    return recs


def get_preview_url(event: dict) -> str:
    slug = event.get("slug")
    if not slug:
        return "#"
    return f"{PREVIEW_BASE_URL}/eventos/{slug}"


def get_meta_tags(event: dict) -> dict:
    title = event.get("seoTitle") or event.get("name") or "Evento"
    description = event.get("seoDescription") or event.get("shortDescription") or "Descripción del evento"
    image = event.get("mainImageUrl") or "/images/default-event.jpg"
    url = get_preview_url(event)

    return {
        "og": {
            "og:title": title,
            "og:description": description,
            "og:image": image,
            "og:url": url,
            "og:type": "website",
            "og:site_name": SITE_NAME,
        },
        "twitter": {
            "twitter:card": "summary_large_image",
            "twitter:title": title,
            "twitter:description": description,
            "twitter:image": image,
            "twitter:site": "@ravehub",
        },
        "basic": {
            "description": description,
            "keywords": ", ".join(event.get("seoKeywords") or event.get("tags") or []),
            "canonical": url,
        },
    }
