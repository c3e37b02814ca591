"""
Family provisioning shared by explicit creation and the first invite.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, AuditEvent, Family

# Plans with fewer screens have no seat to share
MIN_SHAREABLE_SCREENS = 2

UNNAMED = "Unnamed"


def display_name(account: Account) -> str:
    return account.name or UNNAMED


def can_own_family(account: Account) -> bool:
    return account.max_screens >= MIN_SHAREABLE_SCREENS


async def create_family_for(uow: UnitOfWork, owner: Account) -> Family:
    """
    Insert the owner's family sized to their plan and record it.

    The caller has already checked eligibility and that the owner neither
    owns nor belongs to a family.
    """
    family = Family(
        owner_id=owner.id,
        name=f"{display_name(owner)}'s family",
        max_seats=owner.max_screens,
    )
    family = await uow.families.create(family)

    audit = AuditEvent(
        family_id=family.id,
        account_id=owner.id,
        action="family_created",
        event_metadata={"max_seats": family.max_seats},
    )
    await uow.audit_events.create(audit)
    return family
