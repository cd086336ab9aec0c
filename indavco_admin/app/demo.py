"""Seed content for ``--demo`` mode (in-memory ports, no backend)."""

from __future__ import annotations

from typing import Dict, Tuple

from ..adapters.content_memory import ContentMemoryAdapter
from ..domain.entities import BlogPost, Client, CorporatePlan, Entity, Project, Service
from ..domain.ports import ResourcePort
from ..domain.resources import ResourceDescriptor

DEMO_SEED: Dict[str, Tuple[Entity, ...]] = {
    "services": (
        Service(
            id="svc-1",
            title="Desarrollo de software a medida",
            description="Aplicaciones web y móviles para su negocio.",
            features=("Análisis de requerimientos", "Soporte post-lanzamiento"),
            order=1,
        ),
        Service(id="svc-2", title="Consultoría cloud", description="Migración y operación.", icon="cloud", order=2),
    ),
    "blog": (
        BlogPost(
            id="post-1",
            title="Tendencias tecnológicas 2025",
            slug="tendencias-tecnologicas-2025",
            excerpt="Lo que viene este año.",
            content="...",
            tags=("ia", "cloud"),
            is_published=True,
            created_at="2025-01-15T10:00:00.000Z",
        ),
    ),
    "projects": (
        Project(
            id="prj-1",
            title="Portal de clientes",
            description="Autogestión para clientes corporativos.",
            client="ACME",
            technologies=("React", "Node.js"),
            completed_date="2024-11-30",
            featured=True,
        ),
    ),
    "corporate-plans": (
        CorporatePlan(
            id="plan-1",
            name="Empresarial",
            price=499.0,
            description="Para equipos medianos.",
            features=("Soporte prioritario", "SLA 99.9%"),
            recommended=True,
            max_users=50,
            support="prioritario",
        ),
    ),
    "clients": (Client(id="cli-1", name="ACME", logo="/uploads/clients/acme.png", order=1),),
}


def demo_port_factory(latency_s: float = 0.2):
    """Return a port factory serving :data:`DEMO_SEED` from memory."""

    def factory(descriptor: ResourceDescriptor) -> ResourcePort:
        return ContentMemoryAdapter(
            descriptor,
            seed=DEMO_SEED.get(descriptor.key, ()),
            latency_s=latency_s,
        )

    return factory
