# recruitdesk/recycle/entity_registry.py
"""
Static description of soft-deletable entities and the edges a delete or
restore cascades along.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from deskkit import UnknownEntityType
from recruitdesk.db.schemas import FeatureKey


class EntityType(str, Enum):
    CANDIDATE = "candidate"
    EMPLOYER = "employer"
    JOB_ORDER = "job_order"
    PLACEMENT = "placement"
    PASSPORT_TRACKING = "passport_tracking"
    VISA_TRACKING = "visa_tracking"
    MEDICAL_TRACKING = "medical_tracking"
    INTERVIEW_TRACKING = "interview_tracking"
    TRAVEL_TRACKING = "travel_tracking"
    PAYMENT = "payment"
    DOCUMENT = "document"
    REQUIRED_DOCUMENT = "required_document"


@dataclass(frozen=True)
class EntitySpec:
    entity_type: EntityType
    table: str
    label: str
    # Feature a caller needs to soft delete this entity; None = core record
    feature_key: Optional[FeatureKey] = None


@dataclass(frozen=True)
class DependencyEdge:
    parent: EntityType
    child: EntityType
    foreign_key: str


ENTITY_REGISTRY: dict[EntityType, EntitySpec] = {
    spec.entity_type: spec
    for spec in (
        EntitySpec(EntityType.CANDIDATE, "candidates", "Candidate"),
        EntitySpec(EntityType.EMPLOYER, "employers", "Employer", FeatureKey.EMPLOYERS),
        EntitySpec(EntityType.JOB_ORDER, "job_orders", "Job order", FeatureKey.JOBS),
        EntitySpec(EntityType.PLACEMENT, "placements", "Placement", FeatureKey.JOBS),
        EntitySpec(
            EntityType.PASSPORT_TRACKING, "passport_tracking", "Passport entry"
        ),
        EntitySpec(
            EntityType.VISA_TRACKING,
            "visa_tracking",
            "Visa entry",
            FeatureKey.VISA_TRACKING,
        ),
        EntitySpec(
            EntityType.MEDICAL_TRACKING,
            "medical_tracking",
            "Medical entry",
            FeatureKey.MEDICAL,
        ),
        EntitySpec(
            EntityType.INTERVIEW_TRACKING,
            "interview_tracking",
            "Interview entry",
            FeatureKey.INTERVIEW,
        ),
        EntitySpec(
            EntityType.TRAVEL_TRACKING,
            "travel_tracking",
            "Travel entry",
            FeatureKey.TRAVEL,
        ),
        EntitySpec(
            EntityType.PAYMENT, "payments", "Payment", FeatureKey.FINANCE_TRACKING
        ),
        EntitySpec(EntityType.DOCUMENT, "documents", "Document", FeatureKey.DOCUMENTS),
        EntitySpec(
            EntityType.REQUIRED_DOCUMENT,
            "required_documents",
            "Required document",
            FeatureKey.ACCESS_SETTINGS,
        ),
    )
}

# Order is the order child tables are updated in
DEPENDENCY_EDGES: tuple[DependencyEdge, ...] = (
    DependencyEdge(EntityType.CANDIDATE, EntityType.DOCUMENT, "candidate_id"),
    DependencyEdge(EntityType.CANDIDATE, EntityType.PLACEMENT, "candidate_id"),
    DependencyEdge(EntityType.CANDIDATE, EntityType.VISA_TRACKING, "candidate_id"),
    DependencyEdge(EntityType.CANDIDATE, EntityType.PAYMENT, "candidate_id"),
    DependencyEdge(EntityType.CANDIDATE, EntityType.MEDICAL_TRACKING, "candidate_id"),
    DependencyEdge(EntityType.CANDIDATE, EntityType.INTERVIEW_TRACKING, "candidate_id"),
    DependencyEdge(EntityType.CANDIDATE, EntityType.TRAVEL_TRACKING, "candidate_id"),
    DependencyEdge(EntityType.CANDIDATE, EntityType.PASSPORT_TRACKING, "candidate_id"),
    DependencyEdge(EntityType.EMPLOYER, EntityType.JOB_ORDER, "employer_id"),
    DependencyEdge(EntityType.JOB_ORDER, EntityType.PLACEMENT, "job_order_id"),
)


def resolve_entity(entity_type: object) -> EntitySpec:
    """
    Registry entry for `entity_type`.

    Raises:
        UnknownEntityType: if the type is not registered
    """
    try:
        return ENTITY_REGISTRY[EntityType(entity_type)]
    except ValueError:
        raise UnknownEntityType(entity_type) from None


def edges_from(parent: EntityType) -> list[DependencyEdge]:
    return [edge for edge in DEPENDENCY_EDGES if edge.parent is parent]


def iter_dependents(
    parent: EntityType, parent_where: str = "id = :id"
) -> Iterator[tuple[EntitySpec, str]]:
    """
    Walk the dependency graph below `parent` depth first.

    Yields (child spec, WHERE clause) pairs. The clause selects the child
    rows that hang off the rows `parent_where` selects in the parent table,
    so grandchildren are reached through a nested subquery on the same
    `:id` parameter.
    """
    parent_table = ENTITY_REGISTRY[parent].table
    for edge in edges_from(parent):
        child = ENTITY_REGISTRY[edge.child]
        if parent_where == "id = :id":
            where = f"{edge.foreign_key} = :id"
        else:
            where = (
                f"{edge.foreign_key} IN "
                f"(SELECT id FROM {parent_table} WHERE {parent_where})"
            )
        yield child, where
        yield from iter_dependents(edge.child, where)


__all__ = [
    "EntityType",
    "EntitySpec",
    "DependencyEdge",
    "ENTITY_REGISTRY",
    "DEPENDENCY_EDGES",
    "resolve_entity",
    "edges_from",
    "iter_dependents",
]
