"""
Core Data Models for Cashflow Helper

These models define the player aggregate and everything it owns:
the profession sheet, assets, liabilities and the ledger.

DESIGN DECISION: The Player is the single aggregate root. Assets,
liabilities and ledger entries are owned exclusively by it and are only
changed through the state core, which works on a deep copy per action.
All collections are ordered most-recent-first.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


def utc_now() -> datetime:
    """Timezone-aware current time, used for every created_at / ts."""
    return datetime.now(timezone.utc)


# Text limits shared by the models and the action checks
NAME_MAX_LENGTH = 200
PLAYER_NAME_MAX_LENGTH = 100
NOTE_MAX_LENGTH = 500


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Phase(str, Enum):
    """
    Game phase.

    CRITICAL: The transition RAT_RACE -> FAST_TRACK is one-way.
    """
    RAT_RACE = "rat_race"
    FAST_TRACK = "fast_track"


class AssetType(str, Enum):
    """Kinds of assets a player can hold."""
    STOCKS = "stocks"
    BUSINESS = "business"
    REAL_ESTATE = "real_estate"
    PERSONAL_PROPERTY = "personal_property"


class LiabilityType(str, Enum):
    """Liability category shown on the liabilities screen."""
    BANK_LOAN = "bank_loan"
    OTHER = "other"


class LiabilityOrigin(str, Enum):
    """
    Where a liability came from.

    MANUAL: entered by the user
    AUTO: overdraft loan created by the system during a purchase or payment
    FIXED: mirror of a profession fixed-debt pair
    """
    MANUAL = "manual"
    AUTO = "auto"
    FIXED = "fixed"


class FixedDebtKey(str, Enum):
    """Profession fixed-debt pairs that are mirrored into the liabilities."""
    MORTGAGE = "mortgage"
    STUDENT_LOAN = "student_loan"
    CAR_LOAN = "car_loan"
    RETAIL_DEBT = "retail_debt"


class LedgerEntryType(str, Enum):
    """Types of ledger records."""
    SET_PROFESSION = "set_profession"
    SET_CHILDREN = "set_children"
    BUY_ASSET = "buy_asset"
    SELL_ASSET = "sell_asset"
    REMOVE_ASSET = "remove_asset"
    ADD_LIABILITY = "add_liability"
    REMOVE_LIABILITY = "remove_liability"
    PAY_OFF_LIABILITY = "pay_off_liability"
    PAYCHECK = "paycheck"
    RECEIVE = "receive"
    PAY = "pay"


# =============================================================================
# PROFESSION
# =============================================================================

class Profession(BaseModel):
    """
    A profession card.

    Income and expense parameters plus five (balance, payment) debt pairs.
    Every numeric field defaults to zero so partially saved documents
    load cleanly.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    profession_name: str = Field(default="Custom", max_length=PLAYER_NAME_MAX_LENGTH)
    savings: float = 0.0
    salary: float = 0.0
    taxes: float = 0.0
    other_expenses: float = 0.0
    per_child_expense: float = 0.0

    mortgage_balance: float = 0.0
    mortgage_payment: float = 0.0
    rent_balance: float = 0.0
    rent_payment: float = 0.0
    student_loan_balance: float = 0.0
    student_loan_payment: float = 0.0
    car_loan_balance: float = 0.0
    car_loan_payment: float = 0.0
    retail_debt_balance: float = 0.0
    retail_debt_payment: float = 0.0

    def fixed_debt(self, key: FixedDebtKey) -> tuple[float, float]:
        """Return the (balance, payment) pair for a fixed debt."""
        return (
            getattr(self, f"{key.value}_balance"),
            getattr(self, f"{key.value}_payment"),
        )

    def set_fixed_debt(self, key: FixedDebtKey, balance: float, payment: float) -> None:
        setattr(self, f"{key.value}_balance", balance)
        setattr(self, f"{key.value}_payment", payment)

    def clear_fixed_debt(self, key: FixedDebtKey) -> None:
        self.set_fixed_debt(key, 0.0, 0.0)


# =============================================================================
# ASSETS
# =============================================================================

class AssetBase(BaseModel):
    """Fields shared by every asset variant."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    auto_update_cash: bool = Field(
        default=True,
        description="Whether buying this asset moved player cash"
    )
    created_at: datetime = Field(default_factory=utc_now)


class StockAsset(AssetBase):
    """Shares of a stock, mutual fund or CD."""
    type: Literal["stocks"] = "stocks"
    share_price: float = Field(..., ge=0)
    num_shares: float = Field(..., ge=0)
    dividend_per_share: float = Field(default=0.0, ge=0)


class BusinessAsset(AssetBase):
    """
    A business.

    cash_flow_monthly is signed: a negative value is a monthly expense.
    """
    type: Literal["business"] = "business"
    cost: float = Field(..., ge=0)
    down_payment: float = Field(..., ge=0)
    liability: float = Field(default=0.0, ge=0)
    cash_flow_monthly: float = 0.0


class RealEstateAsset(AssetBase):
    """Real estate; structurally identical to a business."""
    type: Literal["real_estate"] = "real_estate"
    cost: float = Field(..., ge=0)
    down_payment: float = Field(..., ge=0)
    liability: float = Field(default=0.0, ge=0)
    cash_flow_monthly: float = 0.0


class PersonalPropertyAsset(AssetBase):
    """Personal property: no income, no liability."""
    type: Literal["personal_property"] = "personal_property"
    cost: float = Field(..., ge=0)


Asset = Annotated[
    Union[StockAsset, BusinessAsset, RealEstateAsset, PersonalPropertyAsset],
    Field(discriminator="type"),
]


# =============================================================================
# LIABILITIES & LEDGER
# =============================================================================

class Liability(BaseModel):
    """A debt owned by the player."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    type: LiabilityType = LiabilityType.BANK_LOAN
    principal: float = Field(default=0.0, ge=0)
    payment_monthly: float = Field(default=0.0, ge=0)
    auto_update_cash: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    origin: LiabilityOrigin = LiabilityOrigin.MANUAL
    fixed_key: Optional[FixedDebtKey] = None

    @model_validator(mode="after")
    def validate_fixed_key(self) -> "Liability":
        """Only fixed mirrors carry a back-reference to the profession."""
        if self.origin == LiabilityOrigin.FIXED and self.fixed_key is None:
            raise ValueError("Fixed liabilities must name their fixed_key")
        if self.origin != LiabilityOrigin.FIXED and self.fixed_key is not None:
            raise ValueError("Only fixed liabilities may carry a fixed_key")
        return self


class LedgerEntry(BaseModel):
    """
    A single ledger record.

    Append-only: entries are never changed once written.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    ts: datetime = Field(default_factory=utc_now)
    type: LedgerEntryType
    amount: float = 0.0
    note: Optional[str] = Field(default=None, max_length=NOTE_MAX_LENGTH)


# =============================================================================
# PLAYER AGGREGATE
# =============================================================================

class Player(BaseModel):
    """
    The player aggregate.

    One per saved game. Only the state core mutates it, and always on a
    deep copy that is committed as a whole.
    """

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(default="Player", max_length=PLAYER_NAME_MAX_LENGTH)
    phase: Phase = Phase.RAT_RACE
    cash: float = 0.0
    children: int = Field(default=0, ge=0)
    profession: Profession = Field(default_factory=Profession)
    assets: list[Asset] = Field(default_factory=list)
    liabilities: list[Liability] = Field(default_factory=list)
    ledger: list[LedgerEntry] = Field(default_factory=list)
    announced_fast_track: bool = False

    def find_asset(self, asset_id: UUID) -> Optional[Asset]:
        return next((a for a in self.assets if a.id == asset_id), None)

    def find_liability(self, liability_id: UUID) -> Optional[Liability]:
        return next((l for l in self.liabilities if l.id == liability_id), None)

    def drop_asset(self, asset_id: UUID) -> None:
        self.assets = [a for a in self.assets if a.id != asset_id]

    def drop_liability(self, liability_id: UUID) -> None:
        self.liabilities = [l for l in self.liabilities if l.id != liability_id]

    def record(
        self,
        entry_type: LedgerEntryType,
        amount: float = 0.0,
        note: Optional[str] = None,
    ) -> LedgerEntry:
        """
        Prepend a ledger entry and return it.

        Notes composed from user text (e.g. "Auto Loan for ...") are cut to
        NOTE_MAX_LENGTH.
        """
        if note is not None:
            note = note[:NOTE_MAX_LENGTH]
        entry = LedgerEntry(type=entry_type, amount=amount, note=note)
        self.ledger.insert(0, entry)
        return entry


def new_player() -> Player:
    """A fresh default player: rat race, zero cash, empty collections."""
    return Player()
