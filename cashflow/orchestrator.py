"""
Main Orchestrator for Cashflow Helper

This module ties together all the components and defines the
flow of every user action:
    intent -> state core (clone, mutate, evaluate, commit)
           -> persist player -> audit -> ActionOutcome for the UI

DESIGN DECISION: The orchestrator enforces the boundaries:
- The UI never touches the Player directly, only through GameSession
- A rejected action is reported, never half-applied
- A failed save is logged and does not undo the committed action
- Every action is audited

This is the "glue" between the pure game core and its I/O collaborators.
"""

from typing import Callable, Optional, Union
from uuid import UUID

from cashflow.audit import AuditLogger, configure_logging, create_correlation_id
from cashflow.config import Settings, get_settings
from cashflow.engine.calc import summarize
from cashflow.engine.state import Commit, PlayerStateCore
from cashflow.errors import ActionRejectedError
from cashflow.models.audit import AuditEventBuilder, AuditEventType
from cashflow.models.player import LiabilityType, Player, Profession
from cashflow.models.presets import PlayerPreset, ProfessionPreset
from cashflow.models.summary import ActionOutcome, FinancialSummary
from cashflow.presets import PresetManager
from cashflow.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStoreInterface,
    PlayerPresetRepository,
    PlayerRepository,
    ProfessionPresetRepository,
    StorageError,
)


FAST_TRACK_MESSAGE = "Passive income now covers expenses. You are on the Fast Track!"


class GameSession:
    """
    One player's game, wired to storage and the audit log.

    Every public action returns an ActionOutcome. Rejections come back as
    success=False with the validation message; they never raise.
    """

    def __init__(
        self,
        player_repository: PlayerRepository,
        preset_manager: PresetManager,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = (settings or get_settings()).game
        self._player_repository = player_repository
        self._presets = preset_manager
        self._audit_logger = audit_logger or AuditLogger()
        self._correlation_id: Optional[UUID] = None
        self._last_commit: Optional[Commit] = None
        self._applied_name = ""

        player, fresh = player_repository.load()
        self._core = PlayerStateCore(
            player,
            settings=self._settings,
            observers=[self._on_commit],
        )
        self._audit_logger.log(AuditEventBuilder.state_loaded(player.id, fresh))

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def player(self) -> Player:
        return self._core.player

    @property
    def summary(self) -> FinancialSummary:
        return summarize(self._core.player)

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def profession_presets(self) -> list[ProfessionPreset]:
        return self._presets.profession_presets()

    def player_presets(self) -> list[PlayerPreset]:
        return self._presets.player_presets()

    # -------------------------------------------------------------------------
    # Commit observer
    # -------------------------------------------------------------------------

    def _on_commit(self, commit: Commit) -> None:
        self._last_commit = commit
        player = commit.player

        try:
            self._player_repository.save(player)
        except StorageError as e:
            self._audit_logger.log_storage_failed(
                self._player_repository.key, "write", str(e)
            )

        for loan in commit.auto_loans:
            self._audit_logger.log(AuditEventBuilder.auto_loan_taken(
                liability_id=loan.liability.id,
                principal=loan.liability.principal,
                shortfall=loan.shortfall,
                correlation_id=self._correlation_id,
            ))

        if commit.action == "reset":
            self._audit_logger.log(AuditEventBuilder.state_reset(player.id, self._correlation_id))
        else:
            self._audit_logger.log_action_applied(
                player_id=player.id,
                action=commit.action,
                cash=player.cash,
                correlation_id=self._correlation_id,
            )

        if commit.entered_fast_track:
            figures = summarize(player)
            self._audit_logger.log_fast_track_entered(
                player_id=player.id,
                passive_income=figures.passive_income,
                total_expenses=figures.total_expenses,
                correlation_id=self._correlation_id,
            )

    # -------------------------------------------------------------------------
    # Action runner
    # -------------------------------------------------------------------------

    def _run(
        self,
        action: str,
        operation: Callable[[], object],
        success_message: str = "",
    ) -> ActionOutcome:
        self._correlation_id = create_correlation_id()
        self._last_commit = None
        try:
            operation()
        except ActionRejectedError as e:
            self._audit_logger.log_action_rejected(
                player_id=self._core.player.id,
                action=action,
                reason=e.message,
                correlation_id=self._correlation_id,
            )
            return ActionOutcome(
                success=False,
                message=e.message,
                player=self.player,
                field=e.field,
            )
        except StorageError as e:
            # Only preset writes get here; player saves are handled in _on_commit
            self._audit_logger.log_storage_failed(action, "write", str(e))
            return ActionOutcome(
                success=False,
                message="Could not save. Please try again.",
                player=self.player,
            )
        finally:
            self._correlation_id = None

        entered = bool(self._last_commit and self._last_commit.entered_fast_track)
        return ActionOutcome(
            success=True,
            message=FAST_TRACK_MESSAGE if entered else success_message,
            player=self.player,
            entered_fast_track=entered,
        )

    # -------------------------------------------------------------------------
    # Assets
    # -------------------------------------------------------------------------

    def buy_stock(self, name: str, share_price, num_shares, dividend_per_share=0,
                  auto_update_cash: bool = True) -> ActionOutcome:
        return self._run(
            "buy_stock",
            lambda: self._core.buy_stock(name, share_price, num_shares,
                                         dividend_per_share, auto_update_cash),
            f"Bought stock: {name.strip()}",
        )

    def buy_business(self, name: str, cost, down_payment, liability=0, cash_flow_monthly=0,
                     auto_update_cash: bool = True) -> ActionOutcome:
        return self._run(
            "buy_business",
            lambda: self._core.buy_business(name, cost, down_payment, liability,
                                            cash_flow_monthly, auto_update_cash),
            f"Bought business: {name.strip()}",
        )

    def buy_real_estate(self, name: str, cost, down_payment, liability=0, cash_flow_monthly=0,
                        auto_update_cash: bool = True) -> ActionOutcome:
        return self._run(
            "buy_real_estate",
            lambda: self._core.buy_real_estate(name, cost, down_payment, liability,
                                               cash_flow_monthly, auto_update_cash),
            f"Bought real estate: {name.strip()}",
        )

    def buy_personal_property(self, name: str, cost,
                              auto_update_cash: bool = True) -> ActionOutcome:
        return self._run(
            "buy_personal_property",
            lambda: self._core.buy_personal_property(name, cost, auto_update_cash),
            f"Bought: {name.strip()}",
        )

    def sell_asset(self, asset_id: Union[UUID, str], price, shares=None) -> ActionOutcome:
        return self._run(
            "sell_asset",
            lambda: self._core.sell_asset(asset_id, price, shares),
            "Asset sold.",
        )

    def remove_asset(self, asset_id: Union[UUID, str]) -> ActionOutcome:
        return self._run("remove_asset", lambda: self._core.remove_asset(asset_id), "Asset removed.")

    # -------------------------------------------------------------------------
    # Liabilities
    # -------------------------------------------------------------------------

    def add_liability(self, name: str, principal, payment_monthly=0,
                      liability_type: LiabilityType = LiabilityType.BANK_LOAN,
                      auto_update_cash: bool = True) -> ActionOutcome:
        return self._run(
            "add_liability",
            lambda: self._core.add_liability(name, principal, payment_monthly,
                                             liability_type, auto_update_cash),
            f"Borrowed: {name.strip()}",
        )

    def remove_liability(self, liability_id: Union[UUID, str]) -> ActionOutcome:
        return self._run(
            "remove_liability",
            lambda: self._core.remove_liability(liability_id),
            "Liability removed.",
        )

    def pay_off_liability(self, liability_id: Union[UUID, str]) -> ActionOutcome:
        return self._run(
            "pay_off_liability",
            lambda: self._core.pay_off_liability(liability_id),
            "Liability paid off.",
        )

    # -------------------------------------------------------------------------
    # Money
    # -------------------------------------------------------------------------

    def collect_paycheck(self) -> ActionOutcome:
        return self._run("collect_paycheck", self._core.collect_paycheck, "Paycheck collected.")

    def receive_money(self, amount, note: Optional[str] = None) -> ActionOutcome:
        return self._run("receive_money", lambda: self._core.receive_money(amount, note), "Money received.")

    def pay_money(self, amount, note: Optional[str] = None) -> ActionOutcome:
        return self._run("pay_money", lambda: self._core.pay_money(amount, note), "Money paid.")

    # -------------------------------------------------------------------------
    # Profession, family and name
    # -------------------------------------------------------------------------

    def set_profession(
        self,
        profession: Union[Profession, dict],
        apply_savings_to_cash: Optional[bool] = None,
        save_as_preset: Optional[bool] = None,
    ) -> ActionOutcome:
        """
        Set the profession from the profession form.

        Accepts a Profession or the raw form values. Unless disabled, the
        committed card is also stored as a profession preset under its
        profession name.
        """
        outcome = self._run(
            "set_profession",
            lambda: self._core.set_profession(profession, apply_savings_to_cash),
        )
        if not outcome.success:
            return outcome

        card = outcome.player.profession
        if not outcome.entered_fast_track:
            outcome.message = f"Profession set: {card.profession_name}"
        if save_as_preset is None:
            save_as_preset = self._settings.save_profession_as_preset
        if save_as_preset and card.profession_name.strip():
            try:
                self._save_profession_preset(card, None)
            except StorageError as e:
                self._audit_logger.log_storage_failed("set_profession", "write", str(e))
        return outcome

    def set_children(self, value) -> ActionOutcome:
        return self._run("set_children", lambda: self._core.set_children(value), "Children updated.")

    def set_name(self, name: str) -> ActionOutcome:
        return self._run("set_name", lambda: self._core.set_name(name), "Name updated.")

    def reset(self) -> ActionOutcome:
        return self._run("reset", self._core.reset, "Started a new game.")

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    def _save_profession_preset(self, profession: Profession, name: Optional[str]) -> ProfessionPreset:
        preset = self._presets.save_profession_preset(profession, name)
        self._log_preset(AuditEventType.PRESET_SAVED, "profession", preset.id, preset.name)
        return preset

    def _log_preset(self, event_type: AuditEventType, kind: str, preset_id: UUID, name: str) -> None:
        self._audit_logger.log(AuditEventBuilder.preset_event(
            event_type=event_type,
            preset_kind=kind,
            preset_id=preset_id,
            name=name,
            correlation_id=self._correlation_id,
        ))

    def save_profession_preset(self, profession: Profession, name: Optional[str] = None) -> ActionOutcome:
        return self._run(
            "save_profession_preset",
            lambda: self._save_profession_preset(profession, name),
            "Profession preset saved.",
        )

    def apply_profession_preset(
        self,
        preset_id: Union[UUID, str],
        apply_savings_to_cash: Optional[bool] = None,
    ) -> ActionOutcome:
        def operation():
            preset = self._presets.find_profession_preset(preset_id)
            self._core.set_profession(preset.profession, apply_savings_to_cash, note=preset.name)
            self._log_preset(AuditEventType.PRESET_APPLIED, "profession", preset.id, preset.name)
            self._applied_name = preset.name

        outcome = self._run("apply_profession_preset", operation)
        if outcome.success and not outcome.entered_fast_track:
            outcome.message = f"Loaded profession preset: {self._applied_name}"
        return outcome

    def delete_profession_preset(self, preset_id: Union[UUID, str]) -> ActionOutcome:
        def operation():
            preset = self._presets.find_profession_preset(preset_id)
            self._presets.delete_profession_preset(preset.id)
            self._log_preset(AuditEventType.PRESET_DELETED, "profession", preset.id, preset.name)

        return self._run("delete_profession_preset", operation, "Profession preset deleted.")

    def save_player_preset(self, name: Optional[str] = None) -> ActionOutcome:
        """Save `name`, or the current player name, as a player preset."""
        def operation():
            preset = self._presets.save_player_preset(name or self._core.player.name)
            self._log_preset(AuditEventType.PRESET_SAVED, "player", preset.id, preset.name)

        return self._run("save_player_preset", operation, "Player saved.")

    def apply_player_preset(self, preset_id: Union[UUID, str]) -> ActionOutcome:
        def operation():
            preset = self._presets.find_player_preset(preset_id)
            self._core.set_name(preset.name)
            self._log_preset(AuditEventType.PRESET_APPLIED, "player", preset.id, preset.name)
            self._applied_name = preset.name

        outcome = self._run("apply_player_preset", operation)
        if outcome.success and not outcome.entered_fast_track:
            outcome.message = f"Loaded player: {self._applied_name}"
        return outcome

    def delete_player_preset(self, preset_id: Union[UUID, str]) -> ActionOutcome:
        def operation():
            preset = self._presets.find_player_preset(preset_id)
            self._presets.delete_player_preset(preset.id)
            self._log_preset(AuditEventType.PRESET_DELETED, "player", preset.id, preset.name)

        return self._run("delete_player_preset", operation, "Player preset deleted.")


def create_app_components(
    store: Optional[KeyValueStoreInterface] = None,
    use_storage: bool = True,
    settings: Optional[Settings] = None,
) -> GameSession:
    """
    Factory function to create a ready-to-use game session.

    Args:
        store: Key-value store to use. Defaults to a JsonFileStore in the
               configured storage directory.
        use_storage: Set to False to keep everything in memory.
        settings: Settings to use instead of the cached ones.
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    configure_logging(settings.logging.level)

    if store is None:
        if use_storage:
            store = JsonFileStore(
                storage_settings.directory,
                write_attempts=storage_settings.write_attempts,
            )
        else:
            store = InMemoryStore()

    audit_logger = AuditLogger()
    player_repository = PlayerRepository(store, storage_settings.player_key, audit_logger)
    preset_manager = PresetManager(
        ProfessionPresetRepository(store, storage_settings.profession_presets_key, audit_logger),
        PlayerPresetRepository(store, storage_settings.player_presets_key, audit_logger),
    )

    return GameSession(
        player_repository=player_repository,
        preset_manager=preset_manager,
        audit_logger=audit_logger,
        settings=settings,
    )
