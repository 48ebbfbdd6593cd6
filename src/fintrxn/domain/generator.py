"""Generation of financial transactions around contribution updates.

The host calls :meth:`Generator.before` right before it stores a
contribution and :meth:`Generator.after` right after. In between, a
:class:`GenerationSession` keeps the state the contribution had, so that the
after-notification can work out what changed and which postings that implies.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol

from fintrxn.domain.changes import ChangeSet, compute_changes
from fintrxn.domain.classifier import classify_cases
from fintrxn.domain.configuration import Configuration
from fintrxn.domain.derivation import TransactionDeriver
from fintrxn.domain.entities import Case, Operation, PostingTemplate, RecordState
from fintrxn.domain.errors import (
    DomainError,
    PersistenceFailure,
    ProtocolViolation,
    UnresolvedAccount,
    UnsupportedCase,
    interleaved_calls,
    no_pending_session,
)
from fintrxn.logging_setup import get_logger

logger = get_logger("fintrxn.domain.generator")


class PostingWriter(Protocol):
    """Anything that can persist postings all at once, e.g. a Database."""

    def write_postings(self, postings: list[PostingTemplate], contribution_id: Any = None) -> list[int]: ...


class ContributionStore(Protocol):
    """Anything that can fetch the stored state of a contribution."""

    def get_contribution(self, contribution_id: int) -> Optional[dict[str, Any]]: ...


@dataclass(frozen=True)
class CaseFailure:
    """A case whose postings were not written."""

    case: Case
    error: DomainError

    @property
    def unsupported(self) -> bool:
        return isinstance(self.error, UnsupportedCase)


@dataclass
class GenerationResult:
    """Outcome of one completed generation session."""

    operation: Operation
    subject_id: Any
    changes: ChangeSet
    cases: list[Case]
    posting_ids: list[int] = field(default_factory=list)
    failures: list[CaseFailure] = field(default_factory=list)

    @property
    def unresolved(self) -> list[CaseFailure]:
        return [f for f in self.failures if isinstance(f.error, UnresolvedAccount)]

    @property
    def unsupported(self) -> list[CaseFailure]:
        return [f for f in self.failures if f.unsupported]


class GenerationSession:
    """One before/after lifecycle of a single contribution."""

    def __init__(
        self,
        operation: Operation,
        subject_id: Any,
        before_state: RecordState,
        old_state: RecordState,
    ):
        """Initialize generation session.

        Args:
            operation: Host operation being performed
            subject_id: Contribution ID, None for a create not yet stored
            before_state: State supplied with the before-notification
            old_state: Baseline the change is measured against
        """
        self.operation = operation
        self.subject_id = subject_id
        self.before_state = dict(before_state)
        self.old_state = dict(old_state)
        self.new_state: Optional[dict[str, Any]] = None
        self.changes: Optional[ChangeSet] = None
        self.cases: Optional[list[Case]] = None

    def check(self, operation: Operation, subject_id: Any) -> None:
        """Make sure an after-notification belongs to this session.

        Raises:
            ProtocolViolation: If operation or contribution ID differ
        """
        if operation != self.operation or (
            self.subject_id is not None and str(self.subject_id) != str(subject_id)
        ):
            raise ProtocolViolation(
                interleaved_calls(self.operation.value, operation.value, self.subject_id, subject_id),
                subject_id=subject_id,
            )

    def complete(
        self,
        subject_id: Any,
        supplied: Mapping[str, Any],
        config: Configuration,
        deriver: TransactionDeriver,
        writer: PostingWriter,
    ) -> GenerationResult:
        """Diff, classify, derive and write the postings of this session.

        Each case is derived in isolation: an unresolved account or an
        unsupported case is recorded and the remaining cases still run.

        Raises:
            PersistenceFailure: If the writer fails
        """
        if self.subject_id is None:
            self.subject_id = subject_id

        if self.operation is Operation.CREATE:
            # a create compares everything ever supplied against nothing
            supplied = {**self.before_state, **{k: v for k, v in supplied.items() if v is not None}}
        self.new_state, self.changes = compute_changes(self.old_state, supplied)
        self.cases = classify_cases(self.old_state, self.new_state, self.changes, config)
        logger.info(
            "Contribution %s (%s): cases %s",
            self.subject_id,
            self.operation.value,
            [c.value for c in self.cases],
        )

        result = GenerationResult(
            operation=self.operation,
            subject_id=self.subject_id,
            changes=self.changes,
            cases=list(self.cases),
        )
        for case in self.cases:
            try:
                postings = deriver.derive(case, self.old_state, self.new_state)
            except UnsupportedCase as e:
                e.subject_id, e.case = self.subject_id, case
                logger.warning("Contribution %s: %s", self.subject_id, e)
                result.failures.append(CaseFailure(case, e))
                continue
            except UnresolvedAccount as e:
                e.subject_id, e.case = self.subject_id, case
                logger.error("Contribution %s, case '%s': %s", self.subject_id, case.value, e)
                result.failures.append(CaseFailure(case, e))
                continue

            # all postings of a case are stored or none
            try:
                result.posting_ids.extend(writer.write_postings(postings, self.subject_id))
            except PersistenceFailure as e:
                e.subject_id, e.case = self.subject_id, case
                logger.error(
                    "Contribution %s, case '%s': writing postings failed: %s",
                    self.subject_id,
                    case.value,
                    e,
                )
                raise
        return result


class Generator:
    """Keeps the pending generation session of every contribution."""

    def __init__(
        self,
        config: Configuration,
        deriver: TransactionDeriver,
        writer: PostingWriter,
        store: Optional[ContributionStore] = None,
    ):
        """Initialize generator.

        Args:
            config: Accounting configuration
            deriver: Transaction deriver
            writer: Destination of derived postings
            store: Source of stored contribution states for edits
        """
        self.config = config
        self.deriver = deriver
        self.writer = writer
        self.store = store
        self._sessions: dict[Any, GenerationSession] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(subject_id: Any) -> Any:
        return None if subject_id is None else str(subject_id)

    def before(
        self, operation: Operation, subject_id: Any, state: Optional[RecordState] = None
    ) -> GenerationSession:
        """Capture the state of a contribution before the host stores it.

        Replaces any session still pending for the same contribution. For an
        edit without a state, the stored contribution is fetched.

        Args:
            operation: Host operation being performed
            subject_id: Contribution ID, None for a create not yet stored
            state: State at the start of the operation
        """
        operation = Operation(operation)
        state = dict(state or {})
        if operation is Operation.CREATE:
            old_state: dict[str, Any] = {}
        elif state or self.store is None:
            old_state = state
        else:
            old_state = dict(self.store.get_contribution(subject_id) or {})

        # stored records may carry the campaign under its legacy name only
        if not old_state.get("campaign_id") and old_state.get("contribution_campaign_id"):
            old_state["campaign_id"] = old_state["contribution_campaign_id"]

        session = GenerationSession(operation, subject_id, state, old_state)
        with self._lock:
            self._sessions[self._key(subject_id)] = session
        return session

    def after(
        self, operation: Operation, subject_id: Any, supplied: Optional[Mapping[str, Any]] = None
    ) -> GenerationResult:
        """Complete the pending session of a contribution after the host stored it.

        Args:
            operation: Host operation that was performed
            subject_id: Contribution ID
            supplied: Fields supplied by the update

        Returns:
            Cases found and postings written

        Raises:
            ProtocolViolation: If no matching before-notification is pending
            PersistenceFailure: If writing a posting fails
        """
        operation = Operation(operation)
        with self._lock:
            session = self._sessions.pop(self._key(subject_id), None)
            if session is None and operation is Operation.CREATE:
                session = self._sessions.pop(None, None)

        if session is None:
            error = ProtocolViolation(no_pending_session(operation.value, subject_id), subject_id=subject_id)
            logger.error("%s", error)
            raise error
        try:
            session.check(operation, subject_id)
        except ProtocolViolation as e:
            logger.error("%s", e)
            raise

        return session.complete(subject_id, supplied or {}, self.config, self.deriver, self.writer)

    def pending(self) -> list[Any]:
        """List the contribution IDs with a pending session."""
        with self._lock:
            return list(self._sessions)
