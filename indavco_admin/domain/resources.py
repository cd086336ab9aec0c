"""Resource descriptors that parameterize the generic editing workflow.

Each descriptor lists the editable fields of one resource type, which of them
are dynamic list fields, whether a slug is derived and whether a binary asset
travels with the payload. Form, modal and save logic are written once against
this description instead of once per resource.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple, Type

from .entities import (
    BILLING_PERIODS,
    BLOG_CATEGORIES,
    CURRENCIES,
    EXCERPT_MAX_LENGTH,
    PROJECT_CATEGORIES,
    SUPPORT_LEVELS,
    BlogPost,
    Client,
    CorporatePlan,
    Entity,
    Project,
    Service,
)

FieldKind = Literal["text", "int", "float", "bool", "choice", "list", "date"]


@dataclass(frozen=True)
class FieldSpec:
    """One editable field: entity attribute, wire key, kind and default."""

    name: str
    wire: str
    kind: FieldKind = "text"
    default: Any = ""
    label: str = ""
    choices: Tuple[str, ...] = ()
    min_value: Optional[float] = None
    max_length: Optional[int] = None
    required: bool = False

    @property
    def is_list(self) -> bool:
        return self.kind == "list"

    def initial_value(self) -> Any:
        """Fresh value for a Create form (list fields start with one empty slot)."""
        if self.is_list:
            return [""]
        return self.default


@dataclass(frozen=True)
class SlugSpec:
    """Derived slug: written to ``name`` from the ``source`` field on submit."""

    name: str = "slug"
    wire: str = "slug"
    source: str = "title"


@dataclass(frozen=True)
class AssetSpec:
    """Binary asset uploaded as a multipart file field."""

    name: str
    wire: str
    label: str = ""
    required_on_create: bool = True


@dataclass(frozen=True)
class ResourceDescriptor:
    """Static description of one manageable resource type."""

    key: str
    label: str
    endpoint: str
    entity_type: Type[Any]
    fields: Tuple[FieldSpec, ...]
    slug: Optional[SlugSpec] = None
    asset: Optional[AssetSpec] = None
    readonly: Tuple[FieldSpec, ...] = ()
    title_field: str = "title"

    @property
    def multipart(self) -> bool:
        """Payloads with an asset are sent as multipart form data."""
        return self.asset is not None

    @property
    def list_fields(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.is_list)

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.key} has no field '{name}'")

    def defaults(self) -> Dict[str, Any]:
        return {spec.name: spec.initial_value() for spec in self.fields}

    def display_title(self, entity: Entity) -> str:
        return str(getattr(entity, self.title_field, "") or entity.id)


def _text(name: str, wire: str, label: str, *, default: str = "", required: bool = False) -> FieldSpec:
    return FieldSpec(name=name, wire=wire, kind="text", default=default, label=label, required=required)


def _list(name: str, wire: str, label: str) -> FieldSpec:
    return FieldSpec(name=name, wire=wire, kind="list", default=(), label=label)


def _flag(name: str, wire: str, label: str, default: bool) -> FieldSpec:
    return FieldSpec(name=name, wire=wire, kind="bool", default=default, label=label)


SERVICES = ResourceDescriptor(
    key="services",
    label="service",
    endpoint="/services",
    entity_type=Service,
    fields=(
        _text("title", "title", "Title", required=True),
        _text("description", "description", "Description", required=True),
        _text("icon", "icon", "Icon", default="code"),
        _text("image", "image", "Image URL"),
        _list("features", "features", "Features"),
        _flag("is_active", "isActive", "Active", True),
        FieldSpec(name="order", wire="order", kind="int", default=0, label="Order"),
    ),
)

BLOG = ResourceDescriptor(
    key="blog",
    label="blog post",
    endpoint="/blog",
    entity_type=BlogPost,
    fields=(
        _text("title", "title", "Title", required=True),
        FieldSpec(
            name="excerpt",
            wire="excerpt",
            kind="text",
            default="",
            label="Excerpt",
            max_length=EXCERPT_MAX_LENGTH,
            required=True,
        ),
        _text("content", "content", "Content", required=True),
        _text("featured_image", "featuredImage", "Featured image URL"),
        FieldSpec(
            name="category",
            wire="category",
            kind="choice",
            default="Tecnología",
            label="Category",
            choices=BLOG_CATEGORIES,
        ),
        _list("tags", "tags", "Tags"),
        _flag("is_published", "isPublished", "Published", False),
    ),
    slug=SlugSpec(),
    readonly=(FieldSpec(name="created_at", wire="createdAt", kind="text"),),
)

PROJECTS = ResourceDescriptor(
    key="projects",
    label="project",
    endpoint="/projects",
    entity_type=Project,
    fields=(
        _text("title", "title", "Title", required=True),
        _text("description", "description", "Description", required=True),
        _text("featured_image", "featuredImage", "Featured image URL"),
        _list("images", "images", "Gallery image URLs"),
        _text("client", "client", "Client"),
        FieldSpec(
            name="category",
            wire="category",
            kind="choice",
            default="Desarrollo Web",
            label="Category",
            choices=PROJECT_CATEGORIES,
        ),
        _list("technologies", "technologies", "Technologies"),
        _flag("featured", "featured", "Featured", False),
        FieldSpec(name="completed_date", wire="completedDate", kind="date", default="", label="Completed"),
        _text("project_url", "projectUrl", "Project URL"),
        _flag("is_active", "isActive", "Active", True),
    ),
)

CORPORATE_PLANS = ResourceDescriptor(
    key="corporate-plans",
    label="plan",
    endpoint="/corporate-plans",
    entity_type=CorporatePlan,
    title_field="name",
    fields=(
        _text("name", "name", "Name", required=True),
        FieldSpec(name="price", wire="price", kind="float", default=0.0, label="Price", min_value=0, required=True),
        FieldSpec(
            name="currency",
            wire="currency",
            kind="choice",
            default="USD",
            label="Currency",
            choices=CURRENCIES,
        ),
        FieldSpec(
            name="billing_period",
            wire="billingPeriod",
            kind="choice",
            default="monthly",
            label="Billing period",
            choices=BILLING_PERIODS,
        ),
        _text("description", "description", "Description", required=True),
        _list("features", "features", "Features"),
        _flag("recommended", "recommended", "Recommended", False),
        _flag("is_active", "isActive", "Active", True),
        FieldSpec(name="max_users", wire="maxUsers", kind="int", default=0, label="Max users", min_value=0),
        FieldSpec(
            name="support",
            wire="support",
            kind="choice",
            default="básico",
            label="Support",
            choices=SUPPORT_LEVELS,
        ),
    ),
)

CLIENTS = ResourceDescriptor(
    key="clients",
    label="client",
    endpoint="/clients",
    entity_type=Client,
    title_field="name",
    fields=(
        _text("name", "name", "Name", required=True),
        _flag("is_active", "isActive", "Active", True),
        FieldSpec(name="order", wire="order", kind="int", default=0, label="Order", min_value=0),
    ),
    asset=AssetSpec(name="logo", wire="logo", label="Logo", required_on_create=True),
)

RESOURCES: Tuple[ResourceDescriptor, ...] = (SERVICES, BLOG, PROJECTS, CORPORATE_PLANS, CLIENTS)


def descriptor_for(key: str) -> ResourceDescriptor:
    for descriptor in RESOURCES:
        if descriptor.key == key:
            return descriptor
    raise KeyError(f"Unknown resource '{key}'")


__all__ = [
    "AssetSpec",
    "BLOG",
    "CLIENTS",
    "CORPORATE_PLANS",
    "FieldKind",
    "FieldSpec",
    "PROJECTS",
    "RESOURCES",
    "ResourceDescriptor",
    "SERVICES",
    "SlugSpec",
    "descriptor_for",
]
