"""
Transaction Wizard Service
==========================
Three-step entry flow that turns a draft into a locked ledger record.

STAGES:
------
List -> Initiation -> Capture -> Review -> List

    start()    List -> Initiation   resets the draft, default source type
                                    Farmer (Procurement) or Vendor (Sales)
    advance()  Initiation -> Capture   needs an effective date
               Capture -> Review       blocked while counterparty is blank
    back()     one stage back, draft kept
    confirm()  Review -> List       prices, locks and prepends the record
    cancel()   any -> List          draft discarded

MODE:
----
The transaction kind (Procurement / Sales) is chosen at List and stays fixed
for the whole pass. switch_mode() only changes what the next start() uses.

VALIDATION:
----------
Permissive by default: only the blank counterparty gate applies. With
strict_validation the confirm step also rejects unknown commodities,
non-positive quantities and ungraded entries.
"""

import threading
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from ..models.transaction import (
    DEFAULT_SOURCE_TYPE,
    LOGISTICS_FIELDS,
    SELECTABLE_GRADES,
    SOURCE_TYPES_BY_KIND,
    Grade,
    RecordStatus,
    SourceType,
    TransactionDraft,
    TransactionKind,
    TransactionRecord,
    WizardStage,
    WizardState,
)
from ..utils.clock import Clock, SystemClock
from ..utils.exceptions import (
    InvalidStageError,
    TransitionBlockedError,
    UnknownCommodityError,
    ValidationError,
)
from ..utils.helpers import format_currency, is_blank
from ..utils.logger import logger
from .audit_service import AuditService
from .ledger_service import LedgerService
from .pricing_service import calculate_unit_price
from .sequence_service import SequenceService

STEP_NUMBERS = {
    WizardStage.LIST: 0,
    WizardStage.INITIATION: 1,
    WizardStage.CAPTURE: 2,
    WizardStage.REVIEW: 3,
}

FORWARD = {
    WizardStage.INITIATION: WizardStage.CAPTURE,
    WizardStage.CAPTURE: WizardStage.REVIEW,
}

BACKWARD = {
    WizardStage.INITIATION: WizardStage.LIST,
    WizardStage.CAPTURE: WizardStage.INITIATION,
    WizardStage.REVIEW: WizardStage.CAPTURE,
}

EDITABLE_STAGES = (WizardStage.INITIATION, WizardStage.CAPTURE)


class TransactionWizard:
    """One user's pass through the entry wizard"""

    def __init__(
        self,
        ledger: LedgerService,
        sequence: SequenceService,
        clock: Optional[Clock] = None,
        audit: Optional[AuditService] = None,
        default_location: str = "",
        strict_validation: bool = False,
        actor: str = "system",
        kind: TransactionKind = TransactionKind.PROCUREMENT
    ):
        self.ledger = ledger
        self.sequence = sequence
        self.clock = clock or SystemClock()
        self.audit = audit
        self.default_location = default_location
        self.strict_validation = strict_validation
        self.actor = actor

        self.kind = kind
        self.stage = WizardStage.LIST
        self.draft = self._new_draft(kind)
        self.last_committed_id: Optional[str] = None
        self._lock = threading.RLock()

    def _new_draft(self, kind: TransactionKind) -> TransactionDraft:
        return TransactionDraft(
            source_type=DEFAULT_SOURCE_TYPE[kind],
            location=self.default_location,
            effective_date=self.clock.today()
        )

    # ---- stage transitions ----

    def switch_mode(self, kind: TransactionKind) -> WizardState:
        """Pick Procurement or Sales for the next pass"""
        kind = TransactionKind(kind)
        with self._lock:
            if self.stage != WizardStage.LIST:
                raise InvalidStageError(
                    f"Cannot switch to {kind.value} during a {self.kind.value} entry",
                    details=self.stage.value
                )
            self.kind = kind
            return self.state()

    def start(self, kind: Optional[TransactionKind] = None) -> WizardState:
        with self._lock:
            if kind is not None:
                self.switch_mode(kind)
            if self.stage != WizardStage.LIST:
                raise InvalidStageError("An entry is already in progress", details=self.stage.value)
            self.draft = self._new_draft(self.kind)
            self.stage = WizardStage.INITIATION
            logger.debug(f"New {self.kind.value} entry started by {self.actor}")
            return self.state()

    @property
    def can_advance(self) -> bool:
        blocked = self._blocked_reason()
        return self.stage in FORWARD and blocked is None

    def _blocked_reason(self) -> Optional[str]:
        if self.stage == WizardStage.INITIATION and self.draft.effective_date is None:
            return "Effective date is required"
        if self.stage == WizardStage.CAPTURE and is_blank(self.draft.counterparty_name):
            return "Counterparty name is required"
        return None

    def advance(self) -> WizardState:
        with self._lock:
            if self.stage not in FORWARD:
                raise InvalidStageError(f"Cannot continue from {self.stage.value}", details=self.stage.value)
            reason = self._blocked_reason()
            if reason:
                logger.warning(f"Wizard transition blocked at {self.stage.value}: {reason}")
                raise TransitionBlockedError(reason, details=self.stage.value)
            self.stage = FORWARD[self.stage]
            return self.state()

    def back(self) -> WizardState:
        with self._lock:
            if self.stage not in BACKWARD:
                raise InvalidStageError("No previous step", details=self.stage.value)
            self.stage = BACKWARD[self.stage]
            return self.state()

    def cancel(self) -> WizardState:
        with self._lock:
            self.draft = self._new_draft(self.kind)
            self.stage = WizardStage.LIST
            return self.state()

    # ---- draft editing ----

    def update(self, **fields: Any) -> WizardState:
        """Edit draft fields; None values are ignored"""
        with self._lock:
            if self.stage not in EDITABLE_STAGES:
                raise InvalidStageError(
                    f"Draft cannot be edited at {self.stage.value}",
                    details=self.stage.value
                )
            changes = {name: value for name, value in fields.items() if value is not None}
            self._validate_changes(changes)

            try:
                self.draft = TransactionDraft.model_validate({**self.draft.model_dump(), **changes})
            except PydanticValidationError as e:
                raise ValidationError("Invalid draft value", details=str(e)) from e
            return self.state()

    def _validate_changes(self, changes: Dict[str, Any]) -> None:
        unknown = set(changes) - set(TransactionDraft.model_fields)
        if unknown:
            raise ValidationError(f"Unknown draft fields: {', '.join(sorted(unknown))}")

        if "source_type" in changes:
            try:
                source_type = SourceType(changes["source_type"])
            except ValueError as e:
                raise ValidationError(f"Unknown source type: {changes['source_type']}") from e
            allowed = SOURCE_TYPES_BY_KIND[self.kind]
            if source_type not in allowed:
                raise ValidationError(
                    f"{source_type.value} is not a {self.kind.value} counterparty",
                    details=", ".join(s.value for s in allowed)
                )

        if "grade" in changes:
            try:
                grade = Grade(changes["grade"])
            except ValueError as e:
                raise ValidationError(f"Unknown grade: {changes['grade']}") from e
            if grade not in SELECTABLE_GRADES:
                raise ValidationError(f"Grade {grade.value} cannot be selected for an entry")

        if self.kind == TransactionKind.PROCUREMENT:
            logistics = [name for name in LOGISTICS_FIELDS if name in changes]
            if logistics:
                raise ValidationError(
                    "Logistics details apply to Sales entries only",
                    details=", ".join(logistics)
                )

    # ---- pricing & commit ----

    def preview(self) -> Tuple[Decimal, Decimal]:
        """Unit price and total for the current draft"""
        unit_price = calculate_unit_price(
            self.draft.commodity, self.draft.grade, self.draft.unit, self.ledger.price_book
        )
        return unit_price, unit_price * self.draft.quantity

    def confirm(self) -> TransactionRecord:
        with self._lock:
            if self.stage != WizardStage.REVIEW:
                raise InvalidStageError(
                    f"Entries are confirmed from Review, not {self.stage.value}",
                    details=self.stage.value
                )
            if is_blank(self.draft.counterparty_name):
                raise TransitionBlockedError("Counterparty name is required")
            if self.strict_validation:
                self._validate_strict()

            unit_price, total_amount = self.preview()
            draft = self.draft.model_dump()
            if self.kind == TransactionKind.PROCUREMENT:
                for name in LOGISTICS_FIELDS:
                    draft[name] = None

            record = TransactionRecord(
                **draft,
                id=self.sequence.next_id(self.kind),
                kind=self.kind,
                unit_price=unit_price,
                total_amount=total_amount,
                created_at=self.clock.now(),
                status=RecordStatus.LOCKED
            )
            self.ledger.append(record)

            if self.audit:
                self.audit.log_commit(record.id, record.model_dump(mode="json"), actor=self.actor)

            if self.kind == TransactionKind.PROCUREMENT:
                logger.info(
                    f"Stock inward recorded for {record.id}: {record.quantity} {record.unit.value} "
                    f"{record.commodity}, payable {format_currency(record.total_amount)}"
                )
            else:
                logger.info(f"Dispatch recorded for {record.id}: vehicle {record.vehicle_number or '-'}")

            self.last_committed_id = record.id
            self.draft = self._new_draft(self.kind)
            self.stage = WizardStage.LIST
            return record

    def _validate_strict(self) -> None:
        draft = self.draft
        if not self.ledger.price_book.has_commodity(draft.commodity):
            raise UnknownCommodityError(f"Commodity not in price master: {draft.commodity}")
        if draft.quantity <= 0:
            raise ValidationError("Quantity must be greater than zero", details=str(draft.quantity))
        if draft.grade not in SELECTABLE_GRADES:
            raise ValidationError(f"Grade {draft.grade.value} entries carry no payment")
        if draft.effective_date is None:
            raise ValidationError("Effective date is required")

    def state(self) -> WizardState:
        unit_price, total_amount = self.preview()
        return WizardState(
            stage=self.stage,
            kind=self.kind,
            step_number=STEP_NUMBERS[self.stage],
            draft=self.draft.model_copy(),
            can_advance=self.can_advance,
            unit_price=unit_price,
            total_amount=total_amount,
            last_committed_id=self.last_committed_id
        )


class WizardService:
    """Keeps one wizard per client session"""

    def __init__(
        self,
        ledger: LedgerService,
        sequence: SequenceService,
        clock: Optional[Clock] = None,
        audit: Optional[AuditService] = None,
        default_location: str = "",
        strict_validation: bool = False
    ):
        self.ledger = ledger
        self.sequence = sequence
        self.clock = clock or SystemClock()
        self.audit = audit
        self.default_location = default_location
        self.strict_validation = strict_validation
        self._sessions: Dict[str, TransactionWizard] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> TransactionWizard:
        with self._lock:
            wizard = self._sessions.get(session_id)
            if wizard is None:
                wizard = TransactionWizard(
                    self.ledger,
                    self.sequence,
                    clock=self.clock,
                    audit=self.audit,
                    default_location=self.default_location,
                    strict_validation=self.strict_validation,
                    actor=session_id
                )
                self._sessions[session_id] = wizard
            return wizard

    def discard(self, session_id: str) -> None:
        """Drop a session's wizard (navigating away from the screen)"""
        with self._lock:
            self._sessions.pop(session_id, None)

    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)
