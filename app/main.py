"""
Streamlit Frontend for Cashflow Helper

A companion screen for the board game: the player keeps their
financial statement here instead of on paper.

DESIGN PRINCIPLES:
1. Every button maps to exactly one GameSession action
2. Rejections are shown as-is and change nothing
3. The Fast Track moment is celebrated once
4. No game rules live in the UI

The UI only renders the session's player snapshot and forwards intents.
"""

import streamlit as st

from cashflow.config import get_settings, validate_all_settings
from cashflow.engine.calc import is_on_fast_track
from cashflow.models.player import AssetType, LiabilityOrigin, LiabilityType
from cashflow.models.summary import ActionOutcome
from cashflow.orchestrator import GameSession, create_app_components
from cashflow.presentation import describe_asset, describe_liability, format_money, ledger_label


# Page configuration
st.set_page_config(
    page_title="Cashflow Helper",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .fast-track-box {
        padding: 20px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 10px 0;
    }
</style>
""", unsafe_allow_html=True)


PROFESSION_FIELDS = [
    ("savings", "Savings"),
    ("salary", "Salary"),
    ("taxes", "Taxes"),
    ("other_expenses", "Other expenses"),
    ("per_child_expense", "Per child expense"),
    ("mortgage_balance", "Home mortgage balance"),
    ("mortgage_payment", "Home mortgage payment"),
    ("rent_balance", "Rent balance"),
    ("rent_payment", "Rent payment"),
    ("student_loan_balance", "School loans balance"),
    ("student_loan_payment", "School loans payment"),
    ("car_loan_balance", "Car loans balance"),
    ("car_loan_payment", "Car loans payment"),
    ("retail_debt_balance", "Credit cards balance"),
    ("retail_debt_payment", "Credit cards payment"),
]


@st.cache_resource
def get_session() -> GameSession:
    """Get or create the game session (cached)."""
    try:
        return create_app_components(use_storage=True)
    except OSError as e:
        st.error(f"Saved games are unavailable: {e}")
        return create_app_components(use_storage=False)


def money(value: float) -> str:
    return format_money(value, get_settings().game.currency_suffix)


def show_outcome(outcome: ActionOutcome) -> None:
    """Remember the outcome so it survives the rerun."""
    st.session_state.last_outcome = outcome
    st.rerun()


def render_last_outcome() -> None:
    outcome = st.session_state.pop("last_outcome", None)
    if outcome is None:
        return
    if outcome.entered_fast_track:
        st.balloons()
        st.markdown(f"""
        <div class="fast-track-box">
            <h3>🚀 {outcome.message}</h3>
        </div>
        """, unsafe_allow_html=True)
    elif outcome.success:
        if outcome.message:
            st.success(outcome.message)
    else:
        st.error(outcome.message)


def main():
    """Main application entry point."""
    session = get_session()

    st.sidebar.title("💸 Cashflow Helper")
    st.sidebar.markdown(f"**{session.player.name}**")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "🏠 Assets", "💳 Liabilities", "💵 In / Out", "📜 Ledger", "👔 Profession"],
        index=0,
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("🔄 New game"):
        show_outcome(session.reset())

    render_last_outcome()

    if page == "📊 Dashboard":
        render_dashboard(session)
    elif page == "🏠 Assets":
        render_assets_page(session)
    elif page == "💳 Liabilities":
        render_liabilities_page(session)
    elif page == "💵 In / Out":
        render_money_page(session)
    elif page == "📜 Ledger":
        render_ledger_page(session)
    elif page == "👔 Profession":
        render_profession_page(session)


def render_dashboard(session: GameSession):
    """Render the financial statement."""
    player = session.player
    summary = session.summary

    st.title(f"📊 {player.name}: {player.profession.profession_name}")
    if is_on_fast_track(player):
        st.success("🚀 Fast Track")
    else:
        st.info("🐀 Rat Race")

    col1, col2 = st.columns([3, 1])
    new_name = col1.text_input("Name", value=player.name, key="dashboard_name")
    if col2.button("Rename"):
        show_outcome(session.set_name(new_name))

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Cash", money(player.cash))
    col2.metric("Monthly cash flow", money(summary.cashflow))
    col3.metric("Passive income", money(summary.passive_income))
    col4.metric("Net worth", money(summary.net_worth))

    st.markdown("### Income")
    st.markdown(f"- Salary: {money(player.profession.salary)}")
    st.markdown(f"- Passive income: {money(summary.passive_income)}")
    st.markdown(f"- **Total income: {money(summary.total_income)}**")

    st.markdown("### Expenses")
    st.markdown(f"- Base expenses: {money(summary.base_expenses)}")
    st.markdown(f"- Asset expenses: {money(summary.asset_expenses)}")
    st.markdown(f"- Liability payments: {money(summary.liabilities_payments)}")
    st.markdown(f"- **Total expenses: {money(summary.total_expenses)}**")

    st.progress(
        min(1.0, max(0.0, summary.passive_income_coverage)),
        text="Passive income vs. expenses",
    )

    if st.button("💰 Collect paycheck", type="primary"):
        show_outcome(session.collect_paycheck())


def render_assets_page(session: GameSession):
    """Render the asset list and purchase forms."""
    st.title("🏠 Assets")
    player = session.player
    suffix = get_settings().game.currency_suffix

    asset_type = st.selectbox(
        "Buy",
        options=list(AssetType),
        format_func=lambda x: x.value.replace("_", " ").title(),
    )

    with st.form("buy_asset", clear_on_submit=True):
        name = st.text_input("Name *")
        auto_cash = st.checkbox("Pay from cash", value=True)

        if asset_type == AssetType.STOCKS:
            share_price = st.text_input("Share price *")
            num_shares = st.text_input("Shares *")
            dividend = st.text_input("Dividend per share (monthly)")
        elif asset_type == AssetType.PERSONAL_PROPERTY:
            cost = st.text_input("Cost *")
        else:
            cost = st.text_input("Cost *")
            down_payment = st.text_input("Down payment *")
            liability = st.text_input("Liability (defaults to cost minus down payment)")
            cash_flow = st.text_input("Monthly cash flow")

        if st.form_submit_button("Buy", type="primary"):
            if asset_type == AssetType.STOCKS:
                outcome = session.buy_stock(name, share_price, num_shares, dividend, auto_cash)
            elif asset_type == AssetType.PERSONAL_PROPERTY:
                outcome = session.buy_personal_property(name, cost, auto_cash)
            elif asset_type == AssetType.BUSINESS:
                outcome = session.buy_business(name, cost, down_payment, liability, cash_flow, auto_cash)
            else:
                outcome = session.buy_real_estate(name, cost, down_payment, liability, cash_flow, auto_cash)
            show_outcome(outcome)

    st.markdown("---")
    if not player.assets:
        st.info("No assets yet.")
        return

    for asset in player.assets:
        with st.expander(describe_asset(asset, suffix)):
            col1, col2, col3 = st.columns([2, 2, 1])
            with col1:
                price = st.text_input("Sell price", key=f"price-{asset.id}")
            with col2:
                shares = None
                if asset.type == AssetType.STOCKS:
                    shares = st.text_input("Shares to sell", key=f"shares-{asset.id}")
            with col3:
                if st.button("Sell", key=f"sell-{asset.id}"):
                    show_outcome(session.sell_asset(asset.id, price, shares))
                if st.button("Remove", key=f"remove-{asset.id}"):
                    show_outcome(session.remove_asset(asset.id))


def render_liabilities_page(session: GameSession):
    """Render liabilities with payoff and the borrow form."""
    st.title("💳 Liabilities")
    player = session.player
    suffix = get_settings().game.currency_suffix

    with st.form("add_liability", clear_on_submit=True):
        name = st.text_input("Name *")
        principal = st.text_input("Principal *")
        payment = st.text_input("Monthly payment")
        liability_type = st.selectbox(
            "Type",
            options=list(LiabilityType),
            format_func=lambda x: x.value.replace("_", " ").title(),
        )
        auto_cash = st.checkbox("Add principal to cash", value=True)
        if st.form_submit_button("Borrow", type="primary"):
            show_outcome(session.add_liability(name, principal, payment, liability_type, auto_cash))

    st.markdown("---")
    if not player.liabilities:
        st.info("Debt free.")
        return

    for liability in player.liabilities:
        col1, col2, col3 = st.columns([4, 1, 1])
        col1.markdown(describe_liability(liability, suffix))
        if col2.button("Pay off", key=f"payoff-{liability.id}"):
            show_outcome(session.pay_off_liability(liability.id))
        label = "Cancel" if liability.origin == LiabilityOrigin.FIXED else "Remove"
        if col3.button(label, key=f"remove-{liability.id}"):
            show_outcome(session.remove_liability(liability.id))


def render_money_page(session: GameSession):
    """Render ad-hoc money in and out."""
    st.title("💵 In / Out")
    st.metric("Cash", money(session.player.cash))

    col1, col2 = st.columns(2)
    with col1:
        with st.form("receive", clear_on_submit=True):
            amount = st.text_input("Amount *")
            note = st.text_input("Note")
            if st.form_submit_button("Receive"):
                show_outcome(session.receive_money(amount, note or None))
    with col2:
        with st.form("pay", clear_on_submit=True):
            amount = st.text_input("Amount *")
            note = st.text_input("Note")
            if st.form_submit_button("Pay"):
                show_outcome(session.pay_money(amount, note or None))


def render_ledger_page(session: GameSession):
    """Render the ledger, newest first."""
    st.title("📜 Ledger")
    ledger = session.player.ledger
    if not ledger:
        st.info("Nothing has happened yet.")
        return

    st.dataframe(
        [
            {
                "When": entry.ts.strftime("%Y-%m-%d %H:%M"),
                "What": ledger_label(entry.type),
                "Amount": money(entry.amount),
                "Note": entry.note or "",
            }
            for entry in ledger
        ],
        use_container_width=True,
        hide_index=True,
    )


def render_profession_page(session: GameSession):
    """Render the profession card, children and presets."""
    st.title("👔 Profession")
    player = session.player
    profession = player.profession

    presets = session.profession_presets()
    if presets:
        col1, col2, col3 = st.columns([3, 1, 1])
        chosen = col1.selectbox("Presets", options=presets, format_func=lambda p: p.name)
        if col2.button("Load"):
            show_outcome(session.apply_profession_preset(chosen.id))
        if col3.button("Delete"):
            show_outcome(session.delete_profession_preset(chosen.id))

    with st.form("profession"):
        profession_name = st.text_input("Profession", value=profession.profession_name)
        values = {}
        col1, col2 = st.columns(2)
        for index, (field, label) in enumerate(PROFESSION_FIELDS):
            column = col1 if index % 2 == 0 else col2
            values[field] = column.number_input(label, value=float(getattr(profession, field)), step=100.0)
        apply_savings = st.checkbox(
            "Set cash to savings",
            value=get_settings().game.apply_savings_to_cash,
        )
        if st.form_submit_button("Save profession", type="primary"):
            card = {"profession_name": profession_name, **values}
            show_outcome(session.set_profession(card, apply_savings_to_cash=apply_savings))

    st.markdown("---")
    st.markdown("### Family")
    children = st.number_input("Children", min_value=0, value=player.children, step=1)
    if st.button("Update children"):
        show_outcome(session.set_children(children))

    st.markdown("---")
    st.markdown("### Players")
    player_presets = session.player_presets()
    col1, col2 = st.columns([3, 1])
    new_name = col1.text_input("Player name", value=player.name)
    if col2.button("Save player"):
        show_outcome(session.save_player_preset(new_name))
    if player_presets:
        col1, col2, col3 = st.columns([3, 1, 1])
        chosen_player = col1.selectbox("Saved players", options=player_presets, format_func=lambda p: p.name)
        if col2.button("Load player"):
            show_outcome(session.apply_player_preset(chosen_player.id))
        if col3.button("Delete player"):
            show_outcome(session.delete_player_preset(chosen_player.id))

    with st.expander("⚙️ Configuration"):
        status = validate_all_settings()
        for section in ("game", "storage", "logging"):
            if status.get(section, False):
                st.success(f"✅ {section.title()} settings loaded")
            else:
                st.error(f"❌ {section.title()}: {status.get(f'{section}_error', 'invalid')}")


if __name__ == "__main__":
    main()
