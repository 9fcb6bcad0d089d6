"""Integration tests for the game session."""

from cashflow.models.audit import AuditEventType
from cashflow.models.player import Phase, Profession
from cashflow.orchestrator import FAST_TRACK_MESSAGE, create_app_components
from cashflow.services.storage import InMemoryStore, PlayerRepository, StorageWriteError


class FailingStore(InMemoryStore):
    """Reads work, every write fails."""

    def set(self, key: str, value: str) -> None:
        raise StorageWriteError(f"Failed to write {key}")


def event_types(session) -> list[AuditEventType]:
    return [e.event_type for e in session.audit_logger.recent_events]


class TestSessionActions:
    """Actions come back as outcomes and are persisted."""

    def test_fresh_session(self, session):
        assert session.player.cash == 0
        assert event_types(session) == [AuditEventType.STATE_LOADED]

    def test_accepted_action_is_saved(self, session, store, settings):
        session.set_profession(Profession(profession_name="Engineer", savings=3000, salary=5000, taxes=1500))
        outcome = session.receive_money("250")

        assert outcome.success is True
        assert outcome.player.cash == 3250
        saved, fresh = PlayerRepository(store, settings.storage.player_key).load()
        assert fresh is False
        assert saved.cash == 3250

    def test_rejection_is_an_outcome(self, session):
        outcome = session.pay_money("0")

        assert outcome.success is False
        assert outcome.message == "Pay money: amount must be greater than 0."
        assert outcome.field == "amount"
        assert event_types(session)[0] == AuditEventType.ACTION_REJECTED

    def test_session_resumes_saved_game(self, store, settings):
        first = create_app_components(store=store, settings=settings)
        first.set_profession(Profession(profession_name="Pilot", savings=2500, salary=9500, taxes=2350))

        second = create_app_components(store=store, settings=settings)
        assert second.player.cash == 2500
        assert second.player.profession.profession_name == "Pilot"

    def test_auto_loan_is_audited(self, session):
        session.set_profession(Profession(profession_name="Janitor", salary=1600, taxes=280))
        session.pay_money(1500)

        assert AuditEventType.AUTO_LOAN_TAKEN in event_types(session)
        loan_event = next(
            e for e in session.audit_logger.recent_events
            if e.event_type == AuditEventType.AUTO_LOAN_TAKEN
        )
        assert loan_event.details == {"principal": 2000, "shortfall": 1500}

    def test_write_failure_keeps_the_action(self, settings):
        session = create_app_components(store=FailingStore(), settings=settings)
        outcome = session.receive_money(100)

        assert outcome.success is True
        assert session.player.cash == 100
        assert AuditEventType.STORAGE_WRITE_FAILED in event_types(session)

    def test_reset(self, session):
        session.receive_money(100)
        outcome = session.reset()

        assert outcome.player.cash == 0
        assert event_types(session)[0] == AuditEventType.STATE_RESET

    def test_rename(self, session):
        outcome = session.set_name("  Ada ")

        assert outcome.success is True
        assert outcome.message == "Name updated."
        assert outcome.player.name == "Ada"
        assert event_types(session)[0] == AuditEventType.ACTION_APPLIED

    def test_profession_from_form_values(self, session):
        outcome = session.set_profession({"profession_name": "Nurse", "savings": 480, "salary": 3100})

        assert outcome.success is True
        assert outcome.message == "Profession set: Nurse"
        assert outcome.player.cash == 480
        assert session.profession_presets()[0].name == "Nurse"


class TestFastTrackMessage:
    """The transition is announced exactly once."""

    def test_message_on_transition(self, session):
        session.set_profession(Profession(profession_name="Janitor", savings=1000, salary=1600, taxes=100))

        outcome = session.buy_stock("CD", 1, 100, dividend_per_share=1)
        assert outcome.entered_fast_track is True
        assert outcome.message == FAST_TRACK_MESSAGE
        assert outcome.player.phase == Phase.FAST_TRACK
        assert AuditEventType.FAST_TRACK_ENTERED in event_types(session)

        outcome = session.receive_money(10)
        assert outcome.entered_fast_track is False
        assert outcome.message == "Money received."


class TestSessionPresets:
    """Preset operations through the session."""

    def test_set_profession_saves_preset(self, session):
        session.set_profession(Profession(profession_name="Nurse", salary=3100, taxes=600))
        assert [p.name for p in session.profession_presets()] == ["Nurse"]

    def test_set_profession_without_preset(self, session):
        session.set_profession(Profession(profession_name="Nurse", taxes=600), save_as_preset=False)
        assert session.profession_presets() == []

    def test_apply_profession_preset(self, session):
        session.save_profession_preset(Profession(profession_name="Doctor", savings=400, salary=13200, taxes=3420))
        preset = session.profession_presets()[0]

        outcome = session.apply_profession_preset(preset.id)
        assert outcome.success is True
        assert outcome.message == "Loaded profession preset: Doctor"
        assert outcome.player.profession.salary == 13200
        assert outcome.player.cash == 400
        assert outcome.player.ledger[0].note == "Doctor"

    def test_unknown_preset(self, session):
        outcome = session.apply_profession_preset("missing")
        assert outcome.success is False
        assert outcome.message == "Profession preset not found."

    def test_player_presets(self, session):
        assert session.save_player_preset("Ada").success is True
        duplicate = session.save_player_preset("ADA")
        assert duplicate.success is False
        assert duplicate.message == "Player already saved."

        preset = session.player_presets()[0]
        outcome = session.apply_player_preset(preset.id)
        assert outcome.player.name == "Ada"
        assert outcome.player.ledger == []

        assert session.delete_player_preset(preset.id).success is True
        assert session.player_presets() == []
        assert AuditEventType.PRESET_DELETED in event_types(session)

    def test_delete_profession_preset(self, session):
        session.save_profession_preset(Profession(profession_name="Pilot"))
        preset = session.profession_presets()[0]

        assert session.delete_profession_preset(preset.id).success is True
        assert session.delete_profession_preset(preset.id).success is False

    def test_preset_write_failure_is_reported(self, settings):
        session = create_app_components(store=FailingStore(), settings=settings)
        outcome = session.save_player_preset("Ada")

        assert outcome.success is False
        assert outcome.message == "Could not save. Please try again."
        assert AuditEventType.STORAGE_WRITE_FAILED in event_types(session)


class TestTextLimits:
    """Overlong names and notes are rejected before anything is saved."""

    def test_long_asset_name(self, session):
        session.receive_money(1000)
        outcome = session.buy_stock("X" * 201, 10, 1)

        assert outcome.success is False
        assert outcome.message == "Add stock: name must be at most 200 characters."
        assert outcome.field == "stocks"
        assert outcome.player.cash == 1000
        assert outcome.player.assets == []

    def test_long_liability_name(self, session):
        outcome = session.add_liability("L" * 201, 1000)

        assert outcome.success is False
        assert outcome.message == "Add liability: name must be at most 200 characters."
        assert outcome.player.liabilities == []

    def test_name_at_the_limit_is_accepted(self, session):
        outcome = session.add_liability("L" * 200, 1000)
        assert outcome.success is True

    def test_long_notes(self, session):
        paid = session.pay_money(100, "n" * 501)
        received = session.receive_money(100, "n" * 501)

        assert paid.success is False
        assert paid.message == "Pay money: note must be at most 500 characters."
        assert paid.field == "note"
        assert received.success is False
        assert received.player.ledger == []

    def test_long_player_name_is_not_saved(self, session):
        outcome = session.set_name("A" * 150)

        assert outcome.success is False
        assert outcome.message == "Player name: name must be at most 100 characters."
        assert session.player.name != "A" * 150

    def test_long_profession_name(self, session):
        outcome = session.set_profession({"profession_name": "P" * 101, "salary": 3000})

        assert outcome.success is False
        assert outcome.field == "profession"
        assert session.player.profession.salary == 0
        assert session.profession_presets() == []

    def test_game_survives_reload_after_rejected_rename(self, store, settings):
        first = create_app_components(store=store, settings=settings)
        first.receive_money(5000)
        first.set_name("Ada")
        first.set_name("A" * 150)

        second = create_app_components(store=store, settings=settings)
        assert second.player.cash == 5000
        assert second.player.name == "Ada"
        assert AuditEventType.STATE_LOADED in event_types(second)
