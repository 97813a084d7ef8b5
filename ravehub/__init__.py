"""Ravehub core services: currency conversion, SEO schema and admin analytics."""

__version__ = "0.1.0"
