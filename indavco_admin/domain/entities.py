"""Content entities managed by the console.

Entities mirror what the content API returns after the adapter has mapped
camelCase wire keys to snake_case attributes. Identity (``id``) is assigned
by the server and treated as opaque.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple, Union

EntityId = str

BlogCategory = Literal["Tecnología", "Desarrollo", "Innovación", "Negocios", "Tutoriales"]
ProjectCategory = Literal["Desarrollo Web", "App Móvil", "Consultoría", "Infraestructura"]
Currency = Literal["USD", "COP", "EUR"]
BillingPeriod = Literal["monthly", "yearly", "one-time"]
SupportLevel = Literal["básico", "prioritario", "24/7"]

BLOG_CATEGORIES: Tuple[str, ...] = (
    "Tecnología",
    "Desarrollo",
    "Innovación",
    "Negocios",
    "Tutoriales",
)
PROJECT_CATEGORIES: Tuple[str, ...] = (
    "Desarrollo Web",
    "App Móvil",
    "Consultoría",
    "Infraestructura",
)
CURRENCIES: Tuple[str, ...] = ("USD", "COP", "EUR")
BILLING_PERIODS: Tuple[str, ...] = ("monthly", "yearly", "one-time")
SUPPORT_LEVELS: Tuple[str, ...] = ("básico", "prioritario", "24/7")

EXCERPT_MAX_LENGTH = 300


@dataclass(frozen=True)
class Service:
    """A service offered on the public site."""

    id: EntityId
    title: str = ""
    description: str = ""
    icon: str = "code"
    image: str = ""
    features: Tuple[str, ...] = ()
    is_active: bool = True
    order: int = 0


@dataclass(frozen=True)
class BlogPost:
    """A blog article; ``slug`` is derived from ``title`` on every save."""

    id: EntityId
    title: str = ""
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    featured_image: str = ""
    category: BlogCategory = "Tecnología"
    tags: Tuple[str, ...] = ()
    is_published: bool = False
    created_at: str = ""
    """Server timestamp, read-only; shown in the list view."""


@dataclass(frozen=True)
class Project:
    """A portfolio project."""

    id: EntityId
    title: str = ""
    description: str = ""
    featured_image: str = ""
    images: Tuple[str, ...] = ()
    client: str = ""
    category: ProjectCategory = "Desarrollo Web"
    technologies: Tuple[str, ...] = ()
    featured: bool = False
    completed_date: str = ""
    """ISO date (``YYYY-MM-DD``) or empty."""
    project_url: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class CorporatePlan:
    """A priced plan for corporate customers."""

    id: EntityId
    name: str = ""
    price: float = 0.0
    currency: Currency = "USD"
    billing_period: BillingPeriod = "monthly"
    description: str = ""
    features: Tuple[str, ...] = ()
    recommended: bool = False
    is_active: bool = True
    max_users: int = 0
    support: SupportLevel = "básico"


@dataclass(frozen=True)
class Client:
    """A customer shown in the logo wall; ``logo`` is a server-relative path."""

    id: EntityId
    name: str = ""
    logo: str = ""
    is_active: bool = True
    order: int = 0


Entity = Union[Service, BlogPost, Project, CorporatePlan, Client]


__all__ = [
    "BILLING_PERIODS",
    "BLOG_CATEGORIES",
    "BlogPost",
    "CURRENCIES",
    "Client",
    "CorporatePlan",
    "EXCERPT_MAX_LENGTH",
    "Entity",
    "EntityId",
    "PROJECT_CATEGORIES",
    "Project",
    "SUPPORT_LEVELS",
    "Service",
]
