"""
Tables de transition des deux cycles de vie.

Par défaut seule l'appartenance à la liste des statuts est vérifiée ;
STRICT_STATUS_TRANSITIONS active en plus le contrôle des arêtes.
"""
from typing import Dict, FrozenSet
from enum import Enum

from app.core.errors import ConflictError
from app.models import ApplicationStatus, ListingStatus

LISTING_TRANSITIONS: Dict[ListingStatus, FrozenSet[ListingStatus]] = {
    ListingStatus.draft: frozenset({ListingStatus.pending_review, ListingStatus.archived}),
    ListingStatus.pending_review: frozenset({
        ListingStatus.draft, ListingStatus.approved, ListingStatus.rejected,
    }),
    ListingStatus.rejected: frozenset({ListingStatus.draft, ListingStatus.pending_review}),
    ListingStatus.approved: frozenset({ListingStatus.archived}),
    ListingStatus.archived: frozenset({ListingStatus.draft}),
}

APPLICATION_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.submitted: frozenset({
        ApplicationStatus.viewed, ApplicationStatus.under_review,
        ApplicationStatus.accepted, ApplicationStatus.rejected,
    }),
    ApplicationStatus.viewed: frozenset({
        ApplicationStatus.under_review, ApplicationStatus.accepted, ApplicationStatus.rejected,
    }),
    ApplicationStatus.under_review: frozenset({
        ApplicationStatus.accepted, ApplicationStatus.rejected,
    }),
    ApplicationStatus.accepted: frozenset(),
    ApplicationStatus.rejected: frozenset(),
}


def is_allowed(table: Dict[Enum, FrozenSet[Enum]], current: Enum, target: Enum) -> bool:
    """Rester dans le même statut est toujours permis"""
    return current == target or target in table.get(current, frozenset())


def ensure_transition(
    table: Dict[Enum, FrozenSet[Enum]],
    current: Enum,
    target: Enum,
    strict: bool
) -> None:
    if strict and not is_allowed(table, current, target):
        raise ConflictError(
            f"Invalid status transition: {current.value} -> {target.value}"
        )
