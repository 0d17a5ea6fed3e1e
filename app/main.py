"""
Streamlit Frontend for Purchase Manager

A one-screen ledger of purchase line items.

DESIGN PRINCIPLES:
1. The screen only renders and forwards; all rules live in PurchaseManager
2. Every action is a widget callback, so it completes before the rerun
3. Errors are shown, never swallowed

Run with:
    streamlit run app/main.py
"""

import streamlit as st

from purchase_manager.config import validate_all_settings
from purchase_manager.models.record import FIELD_ORDER, REQUIRED_FIELDS
from purchase_manager.orchestrator import PurchaseManager, create_app_components
from purchase_manager.queries import format_number
from purchase_manager.services.transfer import TransferError
from purchase_manager.transfer import MalformedDocument


# Page configuration
st.set_page_config(
    page_title="매입 자료 관리",
    page_icon="📦",
    layout="wide",
)

FILTER_FIELDS = ("keyword", "date", "supplier", "note")
FILTER_PLACEHOLDERS = {
    "keyword": "제품명 또는 코드",
    "date": "YYYY-MM-DD",
    "supplier": "매입처",
    "note": "창고명",
}


@st.cache_resource
def get_manager() -> PurchaseManager:
    """Get or create the purchase manager (cached)."""
    return create_app_components()


def _draft_key(name: str) -> str:
    return f"draft_{name}"


def _filter_key(name: str) -> str:
    return f"filter_{name}"


def _flash(kind: str, message: str) -> None:
    st.session_state.flash = (kind, message)


def sync_draft_widgets(manager: PurchaseManager) -> None:
    """Push draft values into the form widgets."""
    for name, value in manager.draft.values.items():
        st.session_state[_draft_key(name)] = value


def sync_filter_widgets(manager: PurchaseManager) -> None:
    criteria = manager.criteria.model_dump()
    for name in FILTER_FIELDS:
        st.session_state[_filter_key(name)] = criteria[name]


# =============================================================================
# CALLBACKS
# =============================================================================

def on_field_change(manager: PurchaseManager, name: str) -> None:
    manager.set_field(name, st.session_state[_draft_key(name)])


def on_submit(manager: PurchaseManager) -> None:
    was_editing = manager.draft.is_editing
    try:
        result = manager.submit()
    except Exception as e:
        _flash("error", f"저장 실패: {e}")
        sync_draft_widgets(manager)
        return

    if result.is_valid:
        _flash("success", "수정되었습니다" if was_editing else "등록되었습니다")
    else:
        _flash("error", manager.describe_validation(result))
    sync_draft_widgets(manager)


def on_cancel(manager: PurchaseManager) -> None:
    manager.cancel()
    sync_draft_widgets(manager)


def on_delete(manager: PurchaseManager) -> None:
    try:
        manager.delete()
        _flash("success", "삭제되었습니다")
    except Exception as e:
        _flash("error", f"삭제 실패: {e}")
    sync_draft_widgets(manager)


def on_edit(manager: PurchaseManager, index: int) -> None:
    manager.edit(index)
    sync_draft_widgets(manager)


def on_filter_change(manager: PurchaseManager, name: str) -> None:
    manager.set_filter(**{name: st.session_state[_filter_key(name)]})


def on_import(manager: PurchaseManager) -> None:
    uploaded = st.session_state.get("import_file")
    if uploaded is None:
        return
    try:
        count = manager.import_text(uploaded.getvalue().decode("utf-8"))
    except (MalformedDocument, UnicodeDecodeError) as e:
        _flash("error", f"불러오기 실패: {e}")
        return
    _flash("success", f"{count}건을 불러왔습니다")
    sync_filter_widgets(manager)
    sync_draft_widgets(manager)


def on_save_export(manager: PurchaseManager) -> None:
    try:
        location = manager.save_export()
    except TransferError as e:
        _flash("error", str(e))
        return
    _flash("success", f"저장됨: {location}")


# =============================================================================
# RENDERING
# =============================================================================

def render_form(manager: PurchaseManager) -> None:
    view = manager.view()
    labels = dict(view.field_labels)

    columns = st.columns(3)
    for position, name in enumerate(FIELD_ORDER):
        key = _draft_key(name)
        if key not in st.session_state:
            st.session_state[key] = view.draft[name]
        suggestions = manager.suggestions(name)
        label = labels[name] + (" *" if name in REQUIRED_FIELDS else "")
        with columns[position % 3]:
            st.text_input(
                label,
                key=key,
                placeholder="YYYY-MM-DD" if name == "date" else "",
                help=", ".join(suggestions[:10]) or None,
                on_change=on_field_change,
                args=(manager, name),
            )

    buttons = st.columns([1, 1, 1, 5])
    if view.is_editing:
        buttons[0].button("삭제", on_click=on_delete, args=(manager,))
    buttons[1].button(
        "수정" if view.is_editing else "등록",
        type="primary",
        on_click=on_submit,
        args=(manager,),
    )
    buttons[2].button("취소", on_click=on_cancel, args=(manager,))


def render_transfer(manager: PurchaseManager) -> None:
    col1, col2, col3 = st.columns([3, 1, 1])
    with col1:
        st.file_uploader(
            "JSON 불러오기",
            type=["json"],
            key="import_file",
            on_change=on_import,
            args=(manager,),
        )
    with col2:
        st.download_button(
            "저장",
            data=manager.export_text(),
            file_name=manager.export_filename,
            mime="application/json",
        )
    with col3:
        st.button("폴더에 저장", on_click=on_save_export, args=(manager,))


def render_filters(manager: PurchaseManager) -> None:
    columns = st.columns(4)
    for column, name in zip(columns, FILTER_FIELDS):
        key = _filter_key(name)
        if key not in st.session_state:
            st.session_state[key] = getattr(manager.criteria, name)
        with column:
            st.text_input(
                name,
                key=key,
                placeholder=FILTER_PLACEHOLDERS[name],
                label_visibility="collapsed",
                on_change=on_filter_change,
                args=(manager, name),
            )


def render_table(manager: PurchaseManager) -> None:
    view = manager.view()
    labels = view.field_labels

    header = st.columns(len(labels) + 1)
    for column, (_, label) in zip(header, labels):
        column.markdown(f"**{label}**")
    header[-1].markdown("**수정**")

    for row in view.rows:
        cells = st.columns(len(labels) + 1)
        for column, (name, _) in zip(cells, labels):
            value = getattr(row.record, name)
            column.write(format_number(value) if name in ("quantity", "price") else value)
        cells[-1].button(
            "수정",
            key=f"edit_{row.index}",
            on_click=on_edit,
            args=(manager, row.index),
        )

    totals = view.totals
    st.markdown(
        f"**{totals.count}개 / 총 {view.collection_size}개** &nbsp;&nbsp; "
        f"수량 {format_number(totals.total_quantity)} / "
        f"금액 {format_number(totals.total_amount)} 원"
    )


def main():
    """Main application entry point."""
    status = validate_all_settings()
    failed = [name for name in ("storage", "transfer", "app") if not status.get(name)]
    if failed:
        for name in failed:
            st.error(f"설정 오류 ({name}): {status.get(f'{name}_error')}")
        st.stop()

    manager = get_manager()

    st.title("매입 자료 관리")

    flash = st.session_state.pop("flash", None)
    if flash:
        kind, message = flash
        if kind == "error":
            st.error(message)
        else:
            st.success(message)

    render_form(manager)
    st.markdown("---")
    render_transfer(manager)
    st.markdown("---")
    render_filters(manager)
    render_table(manager)


if __name__ == "__main__":
    main()
