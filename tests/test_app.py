from textual.widgets import Static

from beancount_tui.app import EditorApp
from beancount_tui.data_types import EditorConfig
from beancount_tui.data_types import MetadataField
from beancount_tui.data_types import MetadataFocus
from beancount_tui.data_types import PostingField
from beancount_tui.data_types import PostingFocus
from beancount_tui.ledger import LedgerModel
from beancount_tui.session import EditorSession


async def test_navigation_and_editing(session: EditorSession):
    app = EditorApp(session)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("tab")
        assert session.focus.location == MetadataFocus(MetadataField.NARRATION)
        await pilot.press("down", "tab")
        assert session.focus.location == PostingFocus(0, PostingField.AMOUNT)
        await pilot.press("backspace", "backspace", "backspace", "backspace", "1", "2")
        assert session.current.postings[0].amount.text == "12"
        await pilot.press("ctrl+n")
        assert session.ledger.current_index == 1
        await pilot.press("ctrl+p")
        assert session.ledger.current_index == 0
        assert session.current.postings[0].amount.text == "12"


async def test_prompt_cancel_then_confirm(session: EditorSession):
    app = EditorApp(session)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("escape")
        prompt = app.screen.query_one("#prompt", Static)
        assert session.prompt.active
        assert prompt.display
        await pilot.press("a", "tab")
        assert session.current.payee.text == "First"
        await pilot.press("escape")
        assert not session.prompt.active
        assert not prompt.display
        await pilot.press("space", "x", "escape", "enter")
        await pilot.pause()
    assert app.return_value is session.records
    assert app.return_value[0].payee.text == "First x"


async def test_exit_without_confirmation(ledger: LedgerModel):
    session = EditorSession(ledger, config=EditorConfig(confirm_exit=False))
    app = EditorApp(session)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()
    assert app.return_value == ledger.transactions


async def test_title_tracks_transaction(session: EditorSession):
    app = EditorApp(session)
    async with app.run_test() as pilot:
        await pilot.pause()
        title = app.screen.query_one("#title", Static)
        assert "(1/3)" in title.content.plain
        await pilot.press("ctrl+n", "ctrl+n")
        assert "(3/3)" in title.content.plain
