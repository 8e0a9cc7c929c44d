"""Storage source filter rule service.

Stores the filter rules of each storage source and decides, from those rules,
whether a file or folder is hidden, inaccessible, or blocked from download.

Decision procedure for one candidate string:
1. No rules of the requested mode -> not filtered.
2. The current user holds IGNORE_HIDDEN on the storage source -> not filtered.
3. Rules are tested in storage order; the first match filters the candidate.
   Empty expressions are skipped, and a rule whose expression cannot be
   matched (malformed glob) is logged and treated as non-matching.
"""

from functools import partial
from typing import Callable, Iterable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from filegate.core.config import get_settings
from filegate.core.events import StorageSourceCopyEvent, StorageSourceDeleteEvent
from filegate.core.logging import get_logger
from filegate.core.paths import parent_path
from filegate.core.patterns import match_compatible
from filegate.domain.entities.filter_rule import FilterMode, FilterRule
from filegate.domain.entities.storage_permission import FileOperatorType
from filegate.domain.services.filter_rule_cache import ALL_RULES, FilterRuleCache
from filegate.domain.services.storage_permission_service import StoragePermissionChecker
from filegate.infrastructure.persistence.models import FilterRuleModel
from filegate.infrastructure.persistence.repositories import FilterRuleRepository

logger = get_logger(__name__)

Matcher = Callable[[str, str], bool]


def _to_entity(model: FilterRuleModel) -> FilterRule:
    return FilterRule(
        id=model.id,
        storage_id=model.storage_id,
        expression=model.expression,
        mode=FilterMode(model.mode),
        description=model.description,
    )


class FilterRuleService:
    """Service for storage source filter rules."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        permission_checker: StoragePermissionChecker,
        cache: FilterRuleCache | None = None,
        matcher: Matcher | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session_factory: Factory for database sessions; each operation
                runs in its own session.
            permission_checker: Resolves the IGNORE_HIDDEN bypass for the
                current user.
            cache: Rule list cache. Defaults to one using the configured TTL.
            matcher: Function (expression, candidate) -> bool. Defaults to
                compatibility glob matching with the configured case sensitivity.
        """
        settings = get_settings()
        self.session_factory = session_factory
        self.permission_checker = permission_checker
        self.cache = cache or FilterRuleCache(ttl_seconds=settings.filter_cache_ttl_seconds)
        self.matcher = matcher or partial(
            match_compatible, case_sensitive=settings.filter_case_sensitive
        )

    # ------------------------------------------------------------------
    # Cached reads
    # ------------------------------------------------------------------

    async def find_by_storage_id(self, storage_id: int | None) -> list[FilterRule]:
        """Get every filter rule of a storage source in storage order.

        Args:
            storage_id: Storage source ID. None yields an empty list.

        Returns:
            List of filter rules.
        """
        if storage_id is None:
            return []

        cached = self.cache.get(storage_id, ALL_RULES)
        if cached is not None:
            return cached

        generation = self.cache.generation(storage_id)
        async with self.session_factory() as session:
            models = await FilterRuleRepository(session).find_by_storage_id(storage_id)
        rules = [_to_entity(model) for model in models]

        self.cache.set(storage_id, ALL_RULES, rules, generation)
        return rules

    async def find_by_storage_id_and_mode(
        self, storage_id: int | None, mode: FilterMode
    ) -> list[FilterRule]:
        """Get the filter rules of one mode for a storage source in storage order.

        Args:
            storage_id: Storage source ID. None yields an empty list.
            mode: Filter mode to select.

        Returns:
            List of filter rules.
        """
        if storage_id is None:
            return []

        cached = self.cache.get(storage_id, mode)
        if cached is not None:
            return cached

        generation = self.cache.generation(storage_id)
        async with self.session_factory() as session:
            models = await FilterRuleRepository(session).find_by_storage_id_and_mode(
                storage_id, mode
            )
        rules = [_to_entity(model) for model in models]

        self.cache.set(storage_id, mode, rules, generation)
        return rules

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def batch_save(self, storage_id: int, rules: Iterable[FilterRule]) -> list[FilterRule]:
        """Replace the whole rule set of a storage source.

        Existing rules are deleted and the given rules inserted with fresh IDs
        in one transaction. If anything fails the transaction is rolled back,
        the previous rule set stays in place, and the error propagates.

        Args:
            storage_id: Storage source ID.
            rules: New rules, in evaluation order. Their id and storage_id are ignored.

        Returns:
            The saved rules with their new IDs.
        """
        rules = list(rules)
        saved: list[FilterRule] = []

        async with self.session_factory() as session:
            async with session.begin():
                repository = FilterRuleRepository(session)
                await repository.delete_by_storage_id(storage_id)
                logger.info(
                    "Replacing storage source filter rules",
                    storage_id=storage_id,
                    rule_count=len(rules),
                )

                for rule in rules:
                    model = await repository.insert(
                        FilterRuleModel(
                            storage_id=storage_id,
                            expression=rule.expression,
                            mode=rule.mode.value,
                            description=rule.description,
                        )
                    )
                    saved.append(_to_entity(model))
                    logger.debug(
                        "Filter rule added",
                        storage_id=storage_id,
                        expression=rule.expression,
                        description=rule.description,
                        mode=rule.mode.value,
                    )

        self.cache.invalidate_storage(storage_id)
        return saved

    async def delete_by_storage_id(self, storage_id: int) -> int:
        """Delete every filter rule of a storage source.

        Args:
            storage_id: Storage source ID.

        Returns:
            Number of rules deleted.
        """
        async with self.session_factory() as session:
            async with session.begin():
                deleted = await FilterRuleRepository(session).delete_by_storage_id(storage_id)

        self.cache.invalidate_storage(storage_id)
        logger.info(
            "Deleted storage source filter rules",
            storage_id=storage_id,
            deleted_count=deleted,
        )
        return deleted

    async def on_storage_source_delete(self, event: StorageSourceDeleteEvent) -> None:
        """Remove the filter rules of a deleted storage source."""
        deleted = await self.delete_by_storage_id(event.id)
        logger.debug(
            "Removed filter rules of deleted storage source",
            storage_id=event.id,
            storage_name=event.name,
            storage_type=getattr(event.type, "description", event.type),
            deleted_count=deleted,
        )

    async def on_storage_source_copy(self, event: StorageSourceCopyEvent) -> None:
        """Copy the filter rules of a duplicated storage source to its copy.

        Rules keep their expression, mode, description and relative order and
        receive new IDs.
        """
        rules = await self.find_by_storage_id(event.from_id)

        async with self.session_factory() as session:
            async with session.begin():
                repository = FilterRuleRepository(session)
                for rule in rules:
                    copy = rule.copy_for(event.new_id)
                    await repository.insert(
                        FilterRuleModel(
                            storage_id=copy.storage_id,
                            expression=copy.expression,
                            mode=copy.mode.value,
                            description=copy.description,
                        )
                    )

        # Nothing is written to the cache; drop anything read before the copy existed
        self.cache.invalidate_storage(event.new_id)
        logger.info(
            "Copied storage source filter rules",
            from_storage_id=event.from_id,
            to_storage_id=event.new_id,
            rule_count=len(rules),
        )

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    async def check_hidden(self, storage_id: int | None, file_name: str) -> bool:
        """Check whether a file or folder name is hidden from listings.

        Args:
            storage_id: Storage source ID.
            file_name: Bare name or '/'-separated path.

        Returns:
            True if a hidden rule matches.
        """
        return await self.decide(storage_id, file_name, FilterMode.HIDDEN)

    async def check_inaccessible(self, storage_id: int | None, path: str) -> bool:
        """Check whether a path must not be accessed.

        Args:
            storage_id: Storage source ID.
            path: Requested path.

        Returns:
            True if an inaccessible rule matches.
        """
        return await self.decide(storage_id, path, FilterMode.INACCESSIBLE)

    async def check_disable_download(self, storage_id: int | None, path: str) -> bool:
        """Check whether a file must not be downloaded.

        The rules are tested against the path itself and, if it has one,
        against its parent path, so a rule on a folder blocks every file in it.

        Args:
            storage_id: Storage source ID.
            path: File name or path.

        Returns:
            True if a disable-download rule matches the path or its parent.
        """
        rules = await self.find_by_storage_id_and_mode(storage_id, FilterMode.DISABLE_DOWNLOAD)
        if not await self._rules_apply(storage_id, rules, path):
            return False

        parent = parent_path(path)
        if self._first_match(storage_id, rules, path):
            return True
        return bool(parent) and self._first_match(storage_id, rules, parent)

    async def decide(self, storage_id: int | None, candidate: str, mode: FilterMode) -> bool:
        """Test a name or path against the rules of one mode.

        Args:
            storage_id: Storage source ID.
            candidate: Bare name or '/'-separated path.
            mode: Which rule list to evaluate.

        Returns:
            True if the candidate is filtered.
        """
        rules = await self.find_by_storage_id_and_mode(storage_id, mode)
        if not await self._rules_apply(storage_id, rules, candidate):
            return False
        return self._first_match(storage_id, rules, candidate)

    async def _rules_apply(
        self, storage_id: int | None, rules: list[FilterRule], candidate: str
    ) -> bool:
        """Whether the rules need evaluating at all: there are some, and no bypass."""
        if not rules:
            logger.debug(
                "Filter rule list is empty",
                storage_id=storage_id,
                candidate=candidate,
            )
            return False

        if await self.permission_checker.has_current_user_permission(
            storage_id, FileOperatorType.IGNORE_HIDDEN
        ):
            logger.debug(
                "User permission ignores filter rules",
                storage_id=storage_id,
                candidate=candidate,
            )
            return False

        return True

    def _first_match(
        self, storage_id: int | None, rules: list[FilterRule], candidate: str
    ) -> bool:
        for rule in rules:
            if rule.is_inert:
                logger.debug(
                    "Skipping filter rule with empty expression",
                    storage_id=storage_id,
                    rule_id=rule.id,
                    candidate=candidate,
                )
                continue

            try:
                matched = self.matcher(rule.expression, candidate)
            except Exception as e:
                logger.error(
                    "Filter rule matching failed, skipping rule",
                    storage_id=storage_id,
                    rule_id=rule.id,
                    expression=rule.expression,
                    candidate=candidate,
                    error=str(e),
                    exc_info=True,
                )
                continue

            logger.debug(
                "Filter rule tested",
                storage_id=storage_id,
                expression=rule.expression,
                candidate=candidate,
                matched=matched,
            )
            if matched:
                return True

        return False
