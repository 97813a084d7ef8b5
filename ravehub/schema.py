"""Generate schema.org JSON-LD graphs for event, blog and product pages.

Input documents are dicts as stored (camelCase keys). Every generator
returns {"@context": "https://schema.org", "@graph": [...]} with keys whose
value is None removed at any depth, matching what the page serializes.
"""

import json
import re
from datetime import date, timedelta
from typing import List, Optional

from .config import (
    BASE_URL,
    BLOG_SAME_AS,
    DEFAULT_COUNTRY,
    DEFAULT_CURRENCY,
    EVENT_SAME_AS,
    LOGO_HEIGHT,
    LOGO_PATH,
    LOGO_WIDTH,
    SITE_ALTERNATE_NAMES,
    SITE_NAME,
)
from .date_utils import format_day_month_es, format_with_offset, parse_iso, to_datetime

SCHEMA_CONTEXT = "https://schema.org"
EVENT_SCHEDULED = "https://schema.org/EventScheduled"
OFFLINE_ATTENDANCE = "https://schema.org/OfflineEventAttendanceMode"
IN_STOCK = "https://schema.org/InStock"
OUT_OF_STOCK = "https://schema.org/OutOfStock"

IMAGE_WIDTH = 1200
IMAGE_HEIGHT = 675
EXTERNAL_EVENT_CAPACITY = 5000

_UNSAFE_CHARS = {ch: "\\u%04x" % ord(ch) for ch in "<>&"}


class UnsupportedSchemaTypeError(ValueError):
    """Raised when asked for a schema type we do not generate."""

    def __init__(self, schema_type: str) -> None:
        super().__init__(f"Unsupported schema type: {schema_type}")
        self.schema_type = schema_type


def generate(schema_type: str, data: dict) -> dict:
    """Dispatch to the generator for schema_type."""
    generators = {
        "blog": generate_blog_posting,
        "news": generate_news_article,
        "festival": generate_festival,
        "concert": generate_concert,
        "product": generate_product,
    }
    generator = generators.get(schema_type)
    if generator is None:
        raise UnsupportedSchemaTypeError(schema_type)
    return generator(data)


def safe_json_dumps(value) -> str:
    """JSON safe to inline in a <script> element."""
    text = json.dumps(value, ensure_ascii=False)
    for ch, escaped in _UNSAFE_CHARS.items():
        text = text.replace(ch, escaped)
    return text


def render_script_tag(schema: dict) -> str:
    return f'<script type="application/ld+json">{safe_json_dumps(schema)}</script>'


# ---------------------------------------------------------------------------
# Shared nodes
# ---------------------------------------------------------------------------

def _website_node(with_search: bool = False) -> dict:
    node = {
        "@type": "WebSite",
        "@id": f"{BASE_URL}/#website",
        "url": BASE_URL,
        "name": SITE_NAME,
        "alternateName": list(SITE_ALTERNATE_NAMES),
    }
    if with_search:
        node["potentialAction"] = {
            "@type": "SearchAction",
            "target": f"{BASE_URL}/buscar?q={{search_term_string}}",
            "query-input": "required name=search_term_string",
        }
    return node


def _organization_node(same_as: List[str]) -> dict:
    return {
        "@type": "Organization",
        "@id": f"{BASE_URL}/#organization",
        "name": SITE_NAME,
        "url": BASE_URL,
        "logo": {
            "@type": "ImageObject",
            "@id": f"{BASE_URL}/#logo",
            "url": f"{BASE_URL}{LOGO_PATH}",
            "width": LOGO_WIDTH,
            "height": LOGO_HEIGHT,
        },
        "sameAs": list(same_as),
    }


def _seller_node() -> dict:
    return {"@type": "Organization", "name": SITE_NAME, "url": BASE_URL}


def _graph(*nodes: dict) -> dict:
    return {"@context": SCHEMA_CONTEXT, "@graph": [_prune(node) for node in nodes]}


def _prune(value):
    """Drop None-valued keys recursively."""
    if isinstance(value, dict):
        return {k: _prune(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune(v) for v in value]
    return value


def strip_token(url: Optional[str]) -> Optional[str]:
    """Remove a storage download token from an image URL."""
    if not url:
        return url
    return re.sub(r"[?&]token=[^&]*", "", url, count=1)


def _iso(value):
    """Stored timestamps become ISO strings; strings pass through."""
    if value is None or isinstance(value, str):
        return value
    dt = to_datetime(value)
    return dt.isoformat().replace("+00:00", "Z") if dt else None


def _instagram_same_as(handle: Optional[str]) -> Optional[List[str]]:
    if not handle:
        return None
    return [f"https://instagram.com/{handle.replace('@', '')}"]


def _country(location: dict, fallback: Optional[str] = None) -> str:
    return location.get("countryCode") or location.get("country") or fallback or DEFAULT_COUNTRY


def _place_name(location: dict) -> str:
    return location.get("venue") or location.get("city") or "Ubicación del evento"


def _short_place(location: dict) -> dict:
    return {
        "@type": "Place",
        "name": _place_name(location),
        "address": {
            "@type": "PostalAddress",
            "addressLocality": location.get("city") or "Ciudad no especificada",
            "addressCountry": _country(location),
        },
    }


def _full_address(location: dict, fallback_country: Optional[str] = None) -> dict:
    return {
        "@type": "PostalAddress",
        "streetAddress": location.get("address") or "",
        "addressLocality": location.get("city") or "Ciudad no especificada",
        "addressRegion": location.get("region") or "",
        "postalCode": location.get("postalCode") or "",
        "addressCountry": _country(location, fallback_country),
    }


def _zone_capacity(zones: Optional[list]) -> Optional[int]:
    if zones is None:
        return None
    return sum(zone.get("capacity") or 0 for zone in zones)


def _find_zone(zones: Optional[list], zone_id) -> Optional[dict]:
    for zone in zones or []:
        if zone.get("id") == zone_id:
            return zone
    return None


# ---------------------------------------------------------------------------
# Event page
# ---------------------------------------------------------------------------

def generate_event_schema(event: dict) -> dict:
    """Full graph for a public event page, including lineup and breadcrumbs."""
    event_url = f"{BASE_URL}/eventos/{event.get('slug', '')}"
    schema_type = event.get("schemaType") or "MusicFestival"
    main_id = f"{event_url}/#{(event.get('schemaType') or 'musicevent').lower()}"
    tz = event.get("timezone")
    location = event.get("location")
    lineup = event.get("artistLineup") or []
    sells_on_platform = bool(event.get("sellTicketsOnPlatform"))

    main_image = event.get("mainImageUrl")
    images = None
    if main_image:
        images = [
            {
                "@type": "ImageObject",
                "url": strip_token(url),
                "width": IMAGE_WIDTH,
                "height": IMAGE_HEIGHT,
                "caption": event.get("name"),
            }
            for url in (main_image, event.get("bannerImageUrl"))
            if url
        ]

    webpage = {
        "@type": "WebPage",
        "@id": f"{event_url}/#webpage",
        "url": event_url,
        "name": event.get("seoTitle") or event.get("name"),
        "isPartOf": {"@id": f"{BASE_URL}/#website"},
        "about": {"@id": main_id},
        "primaryImageOfPage": {
            "@type": "ImageObject",
            "@id": f"{event_url}/#primaryimage",
            "url": main_image,
            "width": IMAGE_WIDTH,
            "height": IMAGE_HEIGHT,
        } if main_image else None,
        "datePublished": _iso(event.get("createdAt")),
        "dateModified": _iso(event.get("updatedAt")) or _iso(event.get("createdAt")),
    }

    if location:
        place = {
            "@type": "Place",
            "name": _place_name(location),
            "address": _full_address(location),
            "geo": {
                "@type": "GeoCoordinates",
                "latitude": location["geo"].get("lat"),
                "longitude": location["geo"].get("lng"),
            } if location.get("geo") else None,
        }
    else:
        place = {
            "@type": "Place",
            "name": "Ubicación por confirmar",
            "address": {
                "@type": "PostalAddress",
                "addressLocality": "Ubicación por confirmar",
                "addressCountry": DEFAULT_COUNTRY,
            },
        }

    organizer = event.get("organizer")
    main_node = {
        "@type": schema_type,
        "@id": main_id,
        "name": event.get("name"),
        "description": event.get("seoDescription") or event.get("shortDescription"),
        "image": images,
        "eventStatus": EVENT_SCHEDULED,
        "eventAttendanceMode": OFFLINE_ATTENDANCE,
        "startDate": format_with_offset(event.get("startDate"), event.get("startTime"), tz),
        "endDate": format_with_offset(event.get("endDate"), event.get("endTime"), tz),
        "doorTime": format_with_offset(event.get("startDate"), event.get("doorTime"), tz)
        if event.get("doorTime") else None,
        "location": place,
        "organizer": {
            "@type": "Organization",
            "name": organizer.get("name"),
            "email": organizer.get("email"),
            "url": organizer.get("website"),
        } if organizer else None,
        "performer": [
            {
                "@type": "Person",
                "name": artist.get("name"),
                "sameAs": _instagram_same_as(artist.get("instagram")),
            }
            for artist in lineup
        ] or None,
        "offers": _event_page_offers(event, event_url),
        "maximumAttendeeCapacity": _zone_capacity(event.get("zones"))
        if sells_on_platform else EXTERNAL_EVENT_CAPACITY,
        "isAccessibleForFree": bool(event.get("isAccessibleForFree")),
        "inLanguage": event.get("inLanguage") or f"es-{(location or {}).get('countryCode') or DEFAULT_COUNTRY}",
        "audience": {
            "@type": "Audience",
            "audienceType": event["audienceType"],
        } if event.get("audienceType") else None,
        "typicalAgeRange": event.get("typicalAgeRange") or "18-120",
    }

    nodes = [
        _website_node(with_search=True),
        _organization_node(EVENT_SAME_AS),
        webpage,
        main_node,
    ]

    for index, artist in enumerate(lineup):
        if artist.get("performanceDate"):
            start = format_with_offset(artist["performanceDate"], artist.get("performanceTime"), tz)
            end = format_with_offset(artist["performanceDate"], artist.get("performanceEndTime"), tz)
        else:
            start = main_node["startDate"]
            end = main_node["endDate"]
        nodes.append({
            "@type": "MusicEvent",
            "@id": f"{event_url}/lineup/{index}/#event",
            "name": f"{artist.get('name')} - {event.get('name')}",
            "startDate": start,
            "endDate": end,
            "eventStatus": EVENT_SCHEDULED,
            "eventAttendanceMode": OFFLINE_ATTENDANCE,
            "location": _short_place(location) if location else None,
            "superEvent": {"@id": main_id},
            "performer": {
                "@type": "Person",
                "name": artist.get("name"),
                "sameAs": _instagram_same_as(artist.get("instagram")),
            },
            "offers": [{
                "@type": "Offer",
                "availability": IN_STOCK,
                "validFrom": main_node["startDate"],
            }] if sells_on_platform else None,
        })

    nodes.append({
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": 1, "name": "Inicio", "item": BASE_URL},
            {"@type": "ListItem", "position": 2, "name": "Eventos", "item": f"{BASE_URL}/eventos"},
            {"@type": "ListItem", "position": 3, "name": event.get("name"), "item": event_url},
        ],
    })

    return _graph(*nodes)


def _event_page_offers(event: dict, event_url: str) -> Optional[List[dict]]:
    """Offers from sales phases x zone pricing, or one external ticket offer."""
    tz = event.get("timezone")
    phases = event.get("salesPhases") or []

    if event.get("sellTicketsOnPlatform") and phases:
        offers = []
        for phase in phases:
            for pricing in phase.get("zonesPricing") or []:
                zone = _find_zone(event.get("zones"), pricing.get("zoneId")) or {}
                zone_name = zone.get("name") or "General"
                valid_from = format_with_offset(phase.get("startDate"), None, tz)
                valid_through = format_with_offset(phase.get("endDate"), None, tz)
                offers.append({
                    "@type": "Offer",
                    "name": f"{zone_name} - {phase.get('name')}",
                    "category": zone_name,
                    "price": pricing.get("price"),
                    "priceCurrency": event.get("currency") or DEFAULT_CURRENCY,
                    "availability": IN_STOCK,
                    "availabilityStarts": valid_from,
                    "availabilityEnds": valid_through,
                    "validFrom": valid_from,
                    "validThrough": valid_through,
                    "inventoryLevel": {
                        "@type": "QuantitativeValue",
                        "value": zone.get("capacity") or pricing.get("available") or 0,
                    },
                    "seller": _seller_node(),
                    "url": f"{event_url}/comprar",
                })
        return offers

    external_url = event.get("externalTicketUrl")
    if external_url:
        return [{
            "@type": "Offer",
            "name": "Comprar entradas",
            "url": external_url,
            "seller": {
                "@type": "Organization",
                "name": event.get("externalOrganizerName") or "Organizador Externo",
                "url": external_url,
            },
        }]
    return None


# ---------------------------------------------------------------------------
# Blog
# ---------------------------------------------------------------------------

def generate_blog_posting(post: dict, comment_count: int = 0) -> dict:
    slug = post.get("slug", "")
    post_url = f"{BASE_URL}/blog/{slug}"
    webpage_id = f"{post_url}/#webpage"
    primary_image_id = f"{post_url}/#primaryimage"

    featured = post.get("featuredImageUrl") or ""
    social = post.get("socialImageUrl") or featured
    caption = (post.get("imageAltTexts") or {}).get(featured) or post.get("title")
    published = _iso(post.get("publishDate")) or _iso(post.get("createdAt"))
    modified = _iso(post.get("updatedDate")) or _iso(post.get("createdAt"))
    categories = post.get("categories") or []
    tags = post.get("tags") or []
    author_id = post.get("authorId", "")

    article = {
        "@type": "BlogPosting",
        "@id": f"{post_url}/#article",
        "isPartOf": {"@id": webpage_id},
        "mainEntityOfPage": {"@id": post_url},
        "headline": post.get("title"),
        "alternativeHeadline": post.get("excerpt"),
        "description": post.get("seoDescription") or post.get("excerpt"),
        "inLanguage": "es-CL",
        "articleSection": categories[0] if categories else "General",
        "keywords": post.get("seoKeywords") or tags,
        "datePublished": published,
        "dateModified": modified,
        "author": [{
            "@type": "Person",
            "@id": f"{BASE_URL}/authors/{author_id}/#author",
            "name": post.get("author"),
            "url": f"{BASE_URL}/authors/{author_id}/",
            "sameAs": [],
        }],
        "publisher": {"@id": f"{BASE_URL}/#organization"},
        "image": [
            {
                "@type": "ImageObject",
                "url": strip_token(featured),
                "width": IMAGE_WIDTH,
                "height": IMAGE_HEIGHT,
                "caption": caption,
            },
            {
                "@type": "ImageObject",
                "url": strip_token(social),
                "width": IMAGE_WIDTH,
                "height": 630,
            },
        ],
        "thumbnailUrl": strip_token(social),
        "wordCount": estimate_word_count(post.get("content") or ""),
        "about": [{"@type": "Thing", "name": tag} for tag in tags],
        "commentCount": comment_count,
    }

    shared = post.get("sharedContent")
    if shared:
        article["sharedContent"] = {
            "@type": "CreativeWork",
            "headline": shared.get("headline"),
            "url": shared.get("url"),
        }

    return _graph(
        _website_node(),
        _organization_node(BLOG_SAME_AS),
        {
            "@type": "WebPage",
            "@id": webpage_id,
            "url": f"{post_url}/",
            "name": post.get("seoTitle") or post.get("title"),
            "isPartOf": {"@id": f"{BASE_URL}/#website"},
            "primaryImageOfPage": {"@id": primary_image_id},
            "datePublished": published,
            "dateModified": modified,
        },
        {
            "@type": "ImageObject",
            "@id": primary_image_id,
            "url": strip_token(featured),
            "width": IMAGE_WIDTH,
            "height": IMAGE_HEIGHT,
            "caption": caption,
        },
        article,
    )


def generate_news_article(post: dict) -> dict:
    """BlogPosting graph retyped as NewsArticle, with FAQ as mainEntity."""
    schema = generate_blog_posting(post)
    article = schema["@graph"][4]
    article["@type"] = "NewsArticle"

    faq = post.get("faq")
    if faq:
        article["mainEntity"] = [
            {
                "@type": "Question",
                "name": item.get("question"),
                "acceptedAnswer": {"@type": "Answer", "text": item.get("answer")},
            }
            for item in faq
        ]
    return schema


def estimate_word_count(content: str) -> int:
    text = re.sub(r"<[^>]*>", "", content)
    return len(text.split())


# ---------------------------------------------------------------------------
# Festivals and concerts
# ---------------------------------------------------------------------------

def generate_festival(event: dict) -> dict:
    return _music_event_graph(event, "MusicFestival", "festival", with_performers=False)


def generate_concert(event: dict) -> dict:
    return _music_event_graph(event, "MusicEvent", "event", with_performers=True)


def _music_event_graph(event: dict, node_type: str, anchor: str, with_performers: bool) -> dict:
    event_url = f"{BASE_URL}/eventos/{event.get('slug', '')}"
    venue_id = f"{BASE_URL}/#venue"
    location = event.get("location") or {}

    main_node = {
        "@type": node_type,
        "@id": f"{event_url}/#{anchor}",
        "name": event.get("name"),
        "description": event.get("description"),
        "image": [
            {"@type": "ImageObject", "url": url, "width": IMAGE_WIDTH, "height": IMAGE_HEIGHT}
            for url in (event.get("mainImageUrl"), event.get("bannerImageUrl"))
            if url
        ],
        "eventStatus": EVENT_SCHEDULED,
        "eventAttendanceMode": OFFLINE_ATTENDANCE,
        "startDate": event.get("startDate"),
        "endDate": event.get("endDate"),
        "doorTime": event.get("doorTime"),
        "location": _short_place(location) if location else {"@id": venue_id},
        "organizer": {"@id": f"{BASE_URL}/#organization"},
    }
    if with_performers:
        main_node["performer"] = [
            {"@type": "Person", "name": artist.get("name"), "sameAs": []}
            for artist in event.get("artistLineup") or []
        ]
    main_node.update({
        "maximumAttendeeCapacity": _zone_capacity(event.get("zones")) or 0,
        "isAccessibleForFree": event.get("isAccessibleForFree"),
        "offers": _zone_offers(event),
        "subEvent": _day_sub_events(event, event_url),
    })

    return _graph(
        _website_node(),
        _organization_node(BLOG_SAME_AS),
        {
            "@type": "Place",
            "@id": venue_id,
            "name": _place_name(location),
            "address": _full_address(location, event.get("country")),
        },
        main_node,
    )


def _zone_offers(event: dict) -> List[dict]:
    """One offer per (phase, zone) pricing entry whose zone still exists."""
    offers = []
    currency = event.get("currency")
    for phase in event.get("salesPhases") or []:
        for pricing in phase.get("zonesPricing") or []:
            zone = _find_zone(event.get("zones"), pricing.get("zoneId"))
            if not zone:
                continue
            offers.append({
                "@type": "Offer",
                "name": f"{zone.get('name')} - {phase.get('name')}",
                "category": zone.get("name"),
                "price": pricing.get("price"),
                "priceCurrency": currency,
                "priceSpecification": {
                    "@type": "PriceSpecification",
                    "price": pricing.get("price"),
                    "priceCurrency": currency,
                },
                "availability": IN_STOCK,
                "availabilityStarts": phase.get("startDate"),
                "availabilityEnds": phase.get("endDate"),
                "validFrom": phase.get("startDate"),
                "validThrough": phase.get("endDate"),
                "inventoryLevel": {"@type": "QuantitativeValue", "value": zone.get("capacity")},
                "url": f"{BASE_URL}/eventos/{event.get('slug', '')}/comprar",
            })
    return offers


def _day_sub_events(event: dict, event_url: str) -> List[dict]:
    """One MusicEvent per festival day that has at least one artist playing."""
    if not event.get("isMultiDay") or not event.get("endDate"):
        return []

    start = parse_iso(str(event.get("startDate") or ""))
    end = parse_iso(str(event["endDate"]))
    if start is None or end is None:
        return []

    location = event.get("location")
    lineup = event.get("artistLineup") or []
    super_anchor = "festival" if event.get("eventType") == "festival" else "event"

    sub_events = []
    current: date = start.date()
    while current <= end.date():
        day_key = current.isoformat()
        day_artists = [
            artist for artist in lineup
            if not artist.get("performanceDate") or artist["performanceDate"] == day_key
        ]
        if day_artists:
            sub_events.append({
                "@type": "MusicEvent",
                "@id": f"{event_url}/dia-{day_key}/#event",
                "name": f"{event.get('name')} - Día {format_day_month_es(current)}",
                "startDate": day_key,
                "location": _short_place(location) if location else {"@id": f"{BASE_URL}/#venue"},
                "superEvent": {"@id": f"{event_url}/#{super_anchor}"},
                "performer": [{"@type": "Person", "name": a.get("name")} for a in day_artists],
            })
        current += timedelta(days=1)

    return sub_events


# ---------------------------------------------------------------------------
# Store products
# ---------------------------------------------------------------------------

def generate_product(product: dict, today: Optional[date] = None) -> dict:
    today = today or date.today()
    product_url = f"{BASE_URL}/tienda/{product.get('slug', '')}"
    images = product.get("images") or []
    alt_texts = product.get("imageAltTexts") or {}
    currency = product.get("currency") or DEFAULT_CURRENCY

    price = float(product.get("price") or 0)
    discount = float(product.get("discountPercentage") or 0)
    discounted = discount > 0
    final_price = f"{price * (1 - discount / 100):.2f}" if discounted else f"{price:.2f}"

    shipping = product.get("shippingDetails")
    properties = []
    if shipping:
        properties.append({"@type": "PropertyValue", "name": "Peso", "value": f"{shipping.get('weight')}kg"})
        dims = shipping.get("dimensions")
        if dims:
            properties.append({
                "@type": "PropertyValue",
                "name": "Dimensiones",
                "value": f"{dims.get('length')}x{dims.get('width')}x{dims.get('height')}cm",
            })

    rating = product.get("averageRating")

    return _graph(
        _website_node(),
        _organization_node(EVENT_SAME_AS),
        {
            "@type": "WebPage",
            "@id": f"{product_url}/#webpage",
            "url": product_url,
            "name": product.get("seoTitle") or product.get("name"),
            "isPartOf": {"@id": f"{BASE_URL}/#website"},
            "primaryImageOfPage": {
                "@type": "ImageObject",
                "@id": f"{product_url}/#primaryimage",
                "url": images[0],
                "width": IMAGE_WIDTH,
                "height": IMAGE_HEIGHT,
            } if images else None,
            "datePublished": _iso(product.get("createdAt")),
            "dateModified": _iso(product.get("updatedAt")) or _iso(product.get("createdAt")),
        },
        {
            "@type": "Product",
            "@id": f"{product_url}/#product",
            "name": product.get("name"),
            "description": product.get("seoDescription") or product.get("shortDescription"),
            "image": [
                {
                    "@type": "ImageObject",
                    "url": img,
                    "width": IMAGE_WIDTH,
                    "height": IMAGE_WIDTH,
                    "caption": alt_texts.get(img) or product.get("name"),
                }
                for img in images
            ],
            "sku": product.get("id"),
            "brand": {"@type": "Brand", "name": product["brand"]} if product.get("brand") else None,
            "category": {
                "@type": "CategoryCode",
                "name": product["categoryId"],
            } if product.get("categoryId") else None,
            "offers": {
                "@type": "Offer",
                "price": final_price,
                "priceCurrency": currency,
                "priceValidUntil": (today + timedelta(days=30)).isoformat() if discounted else None,
                "availability": IN_STOCK if (product.get("stock") or 0) > 0 else OUT_OF_STOCK,
                "condition": "https://schema.org/NewCondition",
                "seller": _seller_node(),
                "priceSpecification": {
                    "@type": "PriceSpecification",
                    "price": final_price,
                    "priceCurrency": currency,
                } if discounted else None,
                "shippingDetails": _shipping_details(currency) if shipping else None,
                "hasMerchantReturnPolicy": {
                    "@type": "MerchantReturnPolicy",
                    "applicableCountry": DEFAULT_COUNTRY,
                    "returnPolicyCategory": "https://schema.org/MerchantReturnFiniteReturnWindow",
                    "merchantReturnDays": 30,
                    "returnMethod": "https://schema.org/ReturnByMail",
                    "returnFees": "https://schema.org/FreeReturn",
                },
            },
            "aggregateRating": {
                "@type": "AggregateRating",
                "ratingValue": f"{float(rating):.1f}",
                "reviewCount": product.get("ratingCount") or 0,
            } if rating else None,
            "review": [],
            "additionalProperty": properties,
        },
    )


def _shipping_details(currency: str) -> dict:
    return {
        "@type": "OfferShippingDetails",
        "shippingRate": {"@type": "MonetaryAmount", "value": "0", "currency": currency},
        "shippingDestination": {"@type": "DefinedRegion", "addressCountry": DEFAULT_COUNTRY},
        "deliveryTime": {
            "@type": "ShippingDeliveryTime",
            "handlingTime": {"@type": "QuantitativeValue", "minValue": 1, "maxValue": 3, "unitText": "Day"},
            "transitTime": {"@type": "QuantitativeValue", "minValue": 3, "maxValue": 7, "unitText": "Day"},
        },
    }
