"""Domain package exports for entities, descriptors and pure helpers."""

from .assets import AssetFile, encode_data_url, stored_asset_url
from .entities import (
    BlogPost,
    Client,
    CorporatePlan,
    Entity,
    EntityId,
    Project,
    Service,
)
from .errors import DeletionError, ListLoadError, MutationError
from .ports import ResourcePort, UseCaseError
from .resources import RESOURCES, ResourceDescriptor, descriptor_for
from .slug import slugify

__all__ = [
    "AssetFile",
    "BlogPost",
    "Client",
    "CorporatePlan",
    "DeletionError",
    "Entity",
    "EntityId",
    "ListLoadError",
    "MutationError",
    "Project",
    "RESOURCES",
    "ResourceDescriptor",
    "ResourcePort",
    "Service",
    "UseCaseError",
    "descriptor_for",
    "encode_data_url",
    "slugify",
    "stored_asset_url",
]
