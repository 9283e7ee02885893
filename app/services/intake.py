"""
Normalisation du formulaire de candidature.

Le formulaire Framer envoie le même champ logique sous plusieurs clés.
On résout les alias ici, une fois, vers ApplicationIntake ; l'ordre de
priorité est celui des tuples ci-dessous (le premier non vide gagne).
"""
from typing import List, Optional, Union
import re

from app.models import ApplicantProfile, ApplicationIntake, ApplicationSubmission

EMPLOYMENT_STATUS_KEYS = ("employment_status_direct", "employment_status")
MONTHLY_INCOME_KEYS = ("monthly_income_range", "monthly_income")
PURCHASE_BUDGET_KEYS = ("purchase_budget_range", "purchase_budget")
MOVE_IN_KEYS = ("intended_move_in_timeframe", "intended_income")
COUNTRY_KEYS = ("country", "country_of_residence")

DECLARATION_KEYS = {
    "declaration_application_not_approval": ("declaration_application_not_approval", "checkbox1"),
    "declaration_prepared_to_provide_docs": ("declaration_prepared_to_provide_docs", "checkbox2"),
    "declaration_actively_looking": ("declaration_actively_looking", "checkbox3"),
}

TRUE_STRINGS = {"true", "yes", "on", "1", "checked"}

_AMOUNT = re.compile(
    r"(\d[\d,]*(?:\.\d+)?)\s*(millions?|thousands?|[km])?(?![a-z])",
    re.IGNORECASE
)
_MULTIPLIERS = {"k": 1_000, "thousand": 1_000, "m": 1_000_000, "million": 1_000_000}


def first_present(submission: ApplicationSubmission, keys) -> Optional[str]:
    """Première valeur non vide parmi les alias"""
    for key in keys:
        value = getattr(submission, key)
        if value not in (None, ""):
            return value
    return None


def coerce_bool(value: Union[bool, str, None]) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.strip().lower() in TRUE_STRINGS


def first_declaration(submission: ApplicationSubmission, keys) -> bool:
    # un False explicite sur la clé prioritaire l'emporte sur l'alias
    for key in keys:
        value = getattr(submission, key)
        if value is not None:
            return coerce_bool(value)
    return False


def collect_documents(submission: ApplicationSubmission) -> List[str]:
    documents = list(submission.documents or [])
    for extra in (submission.government_approved, submission.job_letter):
        if extra:
            documents.append(extra)
    return documents


def normalize_submission(submission: ApplicationSubmission) -> ApplicationIntake:
    """Corps brut -> requête canonique"""
    buying = (submission.application_type or "").strip().lower() == "buy"
    purchase_budget = first_present(submission, PURCHASE_BUDGET_KEYS)

    declarations = {
        field: first_declaration(submission, keys)
        for field, keys in DECLARATION_KEYS.items()
    }

    profile = ApplicantProfile(
        first_name=submission.first_name,
        last_name=submission.last_name,
        phone=submission.phone,
        country_of_residence=first_present(submission, COUNTRY_KEYS),
        parish=submission.parish,
    )

    return ApplicationIntake(
        listing_id=submission.listing_id or None,
        message=submission.message or None,
        application_type=submission.application_type,
        property_type=submission.property_type,
        documents=collect_documents(submission),
        employment_status=first_present(submission, EMPLOYMENT_STATUS_KEYS),
        monthly_income_range=first_present(submission, MONTHLY_INCOME_KEYS),
        budget_range=None if buying else (submission.budget_range or None),
        purchase_budget_range=purchase_budget if buying else None,
        intended_move_in_timeframe=first_present(submission, MOVE_IN_KEYS),
        profile=profile,
        **declarations,
    )


def parse_amounts(text: str) -> List[float]:
    """Montants lus dans un texte libre ("$1.2M", "150k - 200k")"""
    amounts = []
    for number, suffix in _AMOUNT.findall(text):
        value = float(number.replace(",", "")) * _MULTIPLIERS.get(suffix.lower().rstrip("s"), 1)
        if value > 0:
            amounts.append(value)
    return amounts


def estimate_price(*budgets: Optional[str]) -> float:
    """
    Estimation de prix à partir des fourchettes de budget.

    Milieu des deux premiers montants pour une fourchette, le montant seul
    sinon ; 1.0 quand rien n'est lisible (le prix doit rester > 0).
    """
    for budget in budgets:
        if not budget:
            continue
        amounts = parse_amounts(budget)
        if len(amounts) >= 2:
            return round((amounts[0] + amounts[1]) / 2, 2)
        if amounts:
            return amounts[0]
    return 1.0
