"""
Project membership reconciliation.

Resolves a project and a list of usernames, then adds the resulting
(user_id, project_id) pairs to the ``user_projects`` association table.

Both collaborators take the session they operate on; neither keeps state
between calls. The batch is all-or-nothing: when any pair cannot be added,
nothing is written and the session is rolled back.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Sequence, Union

from sqlalchemy import and_, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from repo_api.models.iam.projects import Project
from repo_api.models.iam.relationships import user_project_association
from repo_api.models.iam.users import User

logger = logging.getLogger(__name__)


# ── resolution outcomes ───────────────────────────────────────────────────


class ProjectLookup(NamedTuple):
    exists: bool
    project_id: int | None


@dataclass(frozen=True)
class Found:
    username: str
    user_id: int


@dataclass(frozen=True)
class Missing:
    username: str


UserOutcome = Union[Found, Missing]


@dataclass(frozen=True)
class UserResolution:
    outcomes: tuple[UserOutcome, ...]

    @property
    def all_exist(self) -> bool:
        return not self.missing

    @property
    def user_ids(self) -> list[int]:
        """Identifiers of the resolved users, in request order."""
        return [o.user_id for o in self.outcomes if isinstance(o, Found)]

    @property
    def missing(self) -> list[str]:
        return [o.username for o in self.outcomes if isinstance(o, Missing)]

    def username_for(self, user_id: int) -> str | None:
        for o in self.outcomes:
            if isinstance(o, Found) and o.user_id == user_id:
                return o.username
        return None


@dataclass
class ReconcileResult:
    added: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failed


# ── resolver ──────────────────────────────────────────────────────────────


class EntityResolver:
    """Looks up projects and users by their business keys."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_project(self, name: str) -> ProjectLookup:
        result = await self.db.execute(
            select(Project.project_id).where(Project.project_name == name)
        )
        project_id = result.scalar_one_or_none()
        if project_id is None:
            return ProjectLookup(exists=False, project_id=None)
        return ProjectLookup(exists=True, project_id=project_id)

    async def resolve_users(self, usernames: Sequence[str]) -> UserResolution:
        """Resolve every username, keeping request order.

        A miss does not stop the lookup of the remaining names.
        """
        outcomes: list[UserOutcome] = []
        for username in usernames:
            result = await self.db.execute(
                select(User.id).where(
                    and_(User.user_name == username, User.active_filter())
                )
            )
            user_id = result.scalar_one_or_none()
            if user_id is None:
                logger.info(f"User with username {username} not found")
                outcomes.append(Missing(username))
            else:
                outcomes.append(Found(username, user_id))
        return UserResolution(tuple(outcomes))


# ── reconciler ────────────────────────────────────────────────────────────


class MembershipReconciler:
    """Adds membership rows for a project as a single atomic batch."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _existing_members(self, project_id: int, user_ids: list[int]) -> set[int]:
        if not user_ids:
            return set()
        result = await self.db.execute(
            select(user_project_association.c.user_id).where(
                and_(
                    user_project_association.c.project_id == project_id,
                    user_project_association.c.user_id.in_(user_ids),
                )
            )
        )
        return set(result.scalars().all())

    async def add_memberships(
        self, project_id: int, user_ids: Sequence[int]
    ) -> ReconcileResult:
        """Add ``(user_id, project_id)`` for every id, or none of them.

        Ids already linked to the project, and ids repeated in ``user_ids``,
        are reported in ``failed``. Nothing is committed here; the caller owns
        the transaction.
        """
        user_ids = list(user_ids)
        outcome = ReconcileResult()

        existing = await self._existing_members(project_id, user_ids)
        seen: set[int] = set()
        for user_id in user_ids:
            if user_id in existing or user_id in seen:
                outcome.failed.append(user_id)
            else:
                outcome.added.append(user_id)
            seen.add(user_id)

        if not outcome.succeeded:
            logger.warning(
                f"Rejected membership batch for project {project_id}: "
                f"{len(outcome.failed)} of {len(user_ids)} already linked"
            )
            outcome.added = []
            return outcome

        if not outcome.added:
            return outcome

        try:
            await self.db.execute(
                insert(user_project_association),
                [{"user_id": uid, "project_id": project_id} for uid in outcome.added],
            )
        except IntegrityError as e:
            # Another request linked one of the pairs after the check above
            logger.warning(
                f"Membership insert for project {project_id} violated a constraint: {e.orig}"
            )
            await self.db.rollback()
            return ReconcileResult(added=[], failed=user_ids)

        return outcome


# ── orchestration ─────────────────────────────────────────────────────────


class MembershipOutcome(str, Enum):
    ADDED = "added"
    PROJECT_MISSING = "project_missing"
    USERS_MISSING = "users_missing"
    ALREADY_MEMBERS = "already_members"


@dataclass
class MembershipChange:
    outcome: MembershipOutcome
    project_id: int | None = None
    added: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)


async def add_project_members(
    db: AsyncSession, project_name: str, usernames: Sequence[str]
) -> MembershipChange:
    """Resolve ``project_name`` and ``usernames`` and link them.

    Commits when every pair was added, rolls back otherwise. No row is
    inserted unless the project and every user exist.
    """
    resolver = EntityResolver(db)
    project = await resolver.resolve_project(project_name)
    if not project.exists:
        return MembershipChange(MembershipOutcome.PROJECT_MISSING)

    users = await resolver.resolve_users(usernames)
    if not users.all_exist:
        await db.rollback()
        return MembershipChange(
            MembershipOutcome.USERS_MISSING,
            project_id=project.project_id,
            rejected=users.missing,
        )

    reconciler = MembershipReconciler(db)
    try:
        result = await reconciler.add_memberships(project.project_id, users.user_ids)
        if not result.succeeded:
            await db.rollback()
            return MembershipChange(
                MembershipOutcome.ALREADY_MEMBERS,
                project_id=project.project_id,
                rejected=list(
                    dict.fromkeys(users.username_for(uid) for uid in result.failed)
                ),
            )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"Added {len(result.added)} member(s) to project {project_name} "
        f"(id: {project.project_id})"
    )
    return MembershipChange(
        MembershipOutcome.ADDED,
        project_id=project.project_id,
        added=[users.username_for(uid) for uid in result.added],
    )
