"""Tab 3: Maintenance — billing periods, payments and the default rate."""

import streamlit as st
from datetime import date

from data.session_store import (
    get_topology, get_registry, get_ledger, add_audit_entry,
)
from components.metrics_cards import render_metric_row, render_status_badge
from components.charts import dues_by_block_bar
from components.tables import periods_to_df, render_status_table
from engine.maintenance import (
    set_default_rate, open_month_for_flats, present_periods, record_payment,
    pending_total, flat_maintenance_status, dues_summary, dues_by_block, month_label,
)
from models.maintenance import PaymentUpdate
from config.defaults import PAYMENT_METHODS


def _render_admin_controls(ledger, registry, topology, today):
    st.subheader("Billing")
    col1, col2 = st.columns(2)

    with col1:
        new_rate = st.number_input(
            "Default monthly rate", min_value=0.0, value=float(ledger.default_rate), step=50.0,
            help="Applies to periods opened after the change. Existing periods keep their amount.",
        )
        if st.button("Update Rate", key="btn_rate") and new_rate != ledger.default_rate:
            old = ledger.default_rate
            try:
                set_default_rate(ledger, new_rate)
            except ValueError as e:
                st.error(str(e))
            else:
                add_audit_entry("rate_change", "default_rate", str(old), str(new_rate))
                st.success(f"Default rate set to {new_rate:,.2f}")

    with col2:
        bill_month = st.date_input("Billing month", value=today, key="bill_month")
        registered = [fid for fid, rec in registry.items() if rec.registered]
        if st.button(f"Bill {month_label(bill_month.year, bill_month.month)} to registered flats", key="btn_bill"):
            billed = open_month_for_flats(ledger, registered, bill_month.year, bill_month.month)
            add_audit_entry(
                "billing", "period", "", month_label(bill_month.year, bill_month.month),
                note=f"{len(billed)} flats billed",
            )
            st.success(f"Opened {len(billed)} new period(s); {len(registered) - len(billed)} already billed.")

    summary = dues_summary(ledger, today)
    render_metric_row([
        {"label": "Outstanding", "value": f"{summary['outstanding_amount']:,.2f}"},
        {"label": "Pending Periods", "value": str(summary["pending_periods"])},
        {"label": "Overdue Periods", "value": str(summary["overdue_periods"]),
         "delta": "needs follow-up" if summary["overdue_periods"] else None, "delta_color": "inverse"},
        {"label": "Flats with Dues", "value": str(summary["flats_with_dues"])},
    ])
    if summary["outstanding_amount"] > 0:
        st.plotly_chart(dues_by_block_bar(dues_by_block(ledger, topology, today)), use_container_width=True)


def _render_flat_ledger(ledger, flat_id, editable, today):
    st.subheader(f"Flat {flat_id}")
    status = flat_maintenance_status(ledger, flat_id, today)
    render_status_badge(status)
    st.metric("Pending total", f"{pending_total(ledger, flat_id):,.2f}")

    pending = present_periods(ledger, flat_id, today)
    st.markdown("**Pending payments**")
    if pending:
        render_status_table(periods_to_df(pending))
    else:
        st.caption("No pending payments.")

    if pending and editable:
        with st.form(key=f"payment_form_{flat_id}"):
            month = st.selectbox("Period", [p.month for p in pending])
            amount_due = next(p.amount for p in pending if p.month == month)
            paid_amount = st.number_input("Paid amount", min_value=0.0, value=float(amount_due))
            method = st.selectbox("Payment method", PAYMENT_METHODS)
            transaction_id = st.text_input("Transaction ID (optional)")
            notes = st.text_area("Notes (optional)")
            paid_date = st.date_input("Paid on", value=today)
            submitted = st.form_submit_button("Mark as Paid", type="primary")

        if submitted:
            update = PaymentUpdate(
                payment_method=method,
                paid_amount=paid_amount,
                paid_date=paid_date,
                transaction_id=transaction_id or None,
                notes=notes or None,
            )
            try:
                record_payment(ledger, flat_id, month, update)
            except ValueError as e:
                st.error(str(e))
            else:
                add_audit_entry("payment", month, "pending", "paid", flat_id=flat_id,
                                note=f"{paid_amount:,.2f} via {method}")
                st.rerun()

    paid = ledger.flats.get(flat_id)
    st.markdown("**Payment history**")
    if paid and paid.paid:
        render_status_table(periods_to_df(paid.paid))
    else:
        st.caption("No payments recorded.")


def render(sidebar_state):
    """Render the Maintenance tab."""
    st.header("Maintenance")

    identity = sidebar_state.identity
    topology = get_topology()
    registry = get_registry()
    ledger = get_ledger()
    today = date.today()

    if identity.is_admin:
        _render_admin_controls(ledger, registry, topology, today)
        st.divider()
        flat_ids = [fid for fid, rec in registry.items() if rec.registered]
        if not flat_ids:
            st.info("No registered flats yet.")
            return
        flat_id = st.selectbox("Flat", flat_ids, format_func=str, key="maintenance_flat")
    elif identity.is_owner:
        flat_id = identity.flat_id
    else:
        st.info("Sign in as the flat owner or an administrator to view maintenance dues.")
        return

    _render_flat_ledger(ledger, flat_id, identity.is_admin, today)
