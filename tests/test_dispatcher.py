# tests/test_dispatcher.py

from __future__ import annotations

from pathlib import Path

from tasktalk.dispatch.dispatcher import (
    NO_DESCRIPTION,
    NO_MATCHING_TASKS,
    NO_TASKS,
    NOT_UNDERSTOOD,
    TASK_COMPLETED,
    TASK_NOT_FOUND,
    CommandDispatcher,
)
from tasktalk.intent.intent_models import Intent
from tasktalk.summary.summarizer import Summarizer
from tasktalk.tasks.task_models import TaskDraft
from tasktalk.tasks.task_store import TaskStore

from .fakes import FakeLLMClient


def test_add_then_list_then_complete_by_fragment(state) -> None:
    d = state.dispatcher

    reply = d.dispatch(
        Intent(command="add", description="buy groceries at 5 PM tomorrow", due_date="2026-10-19T17:00:00")
    )
    assert reply == 'Task added: "buy groceries at 5 PM tomorrow" (Due: 2026-10-19 17:00:00)'

    task = state.task_store.get(1)
    assert task is not None
    assert task.completed is False

    assert d.dispatch(Intent(command="list")) == "1. [ ] buy groceries at 5 PM tomorrow (Due: 2026-10-19 17:00:00)"

    assert d.dispatch(Intent(command="complete", description="groceries")) == TASK_COMPLETED
    assert d.dispatch(Intent(command="list")) == "1. [x] buy groceries at 5 PM tomorrow (Due: 2026-10-19 17:00:00)"


def test_add_without_description_does_not_touch_store(state) -> None:
    assert state.dispatcher.dispatch(Intent(command="add")) == NO_DESCRIPTION
    assert state.dispatcher.dispatch(Intent(command="add", description="  ")) == NO_DESCRIPTION
    assert state.task_store.count() == 0
    assert not state.task_store.path.exists()


def test_add_mentions_category(state) -> None:
    reply = state.dispatcher.dispatch(Intent(command="add", description="file taxes", category="admin"))
    assert reply == 'Task added: "file taxes" [admin]'


def test_list_empty_and_order(state) -> None:
    d = state.dispatcher
    assert d.dispatch(Intent(command="list")) == NO_TASKS

    for desc in ["c", "a", "b"]:
        d.dispatch(Intent(command="add", description=desc))
    d.dispatch(Intent(command="complete", id=2))

    assert d.dispatch(Intent(command="list")).splitlines() == ["1. [ ] c", "2. [x] a", "3. [ ] b"]


def test_list_filters(state) -> None:
    d = state.dispatcher
    d.dispatch(Intent(command="add", description="report", category="work"))
    d.dispatch(Intent(command="add", description="laundry", category="home"))

    assert d.dispatch(Intent(command="list", filters={"category": "Work"})) == "1. [ ] report"
    assert d.dispatch(Intent(command="list", filters={"completed": "true"})) == NO_MATCHING_TASKS


def test_complete_prefers_id_then_falls_back_to_fragment(state) -> None:
    store = state.task_store
    store.add(TaskDraft(description="alpha"))
    store.add(TaskDraft(description="beta"))

    # id wins over the description
    assert state.dispatcher.dispatch(Intent(command="complete", id=2, description="alpha")) == TASK_COMPLETED
    assert [t.completed for t in store.list_tasks()] == [False, True]

    # unknown id, fragment still resolves
    assert state.dispatcher.dispatch(Intent(command="complete", id=42, description="ALPHA")) == TASK_COMPLETED
    assert [t.completed for t in store.list_tasks()] == [True, True]


def test_complete_not_found_is_not_an_error(state) -> None:
    state.task_store.add(TaskDraft(description="alpha"))
    assert state.dispatcher.dispatch(Intent(command="complete", description="gamma")) == TASK_NOT_FOUND
    assert state.dispatcher.dispatch(Intent(command="complete")) == TASK_NOT_FOUND
    assert state.task_store.get(1).completed is False


def test_unknown_command(state) -> None:
    assert state.dispatcher.dispatch(Intent(command="delete", id=1)) == NOT_UNDERSTOOD
    assert state.dispatcher.dispatch(Intent(command="")) == NOT_UNDERSTOOD


def test_summary_is_forwarded(state, llm: FakeLLMClient) -> None:
    assert state.dispatcher.dispatch(Intent(command="summary")) == "You have no tasks to summarize."
    assert llm.calls == []

    state.task_store.add(TaskDraft(description="alpha"))
    llm.next_text = "- alpha is pending"
    assert state.dispatcher.dispatch(Intent(command="summary")) == "- alpha is pending"


def test_persist_failure_is_reported_not_raised(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file", "utf-8")
    store = TaskStore(blocker / "db.json")
    dispatcher = CommandDispatcher(store, Summarizer(store, FakeLLMClient()))

    reply = dispatcher.dispatch(Intent(command="add", description="unsaved"))
    assert "saving to disk failed" in reply
    assert store.count() == 1


def test_custom_handler_registration(state) -> None:
    state.dispatcher.register("ping", lambda intent: "pong")
    assert state.dispatcher.dispatch(Intent(command="PING")) == "pong"


def test_out_of_range_due_date_still_renders(state) -> None:
    d = state.dispatcher
    raw = "0001-01-01T00:00:00+14:00"

    assert d.dispatch(Intent(command="add", description="ancient", due_date=raw)) == (
        f'Task added: "ancient" (Due: {raw})'
    )
    assert d.dispatch(Intent(command="list")) == f"1. [ ] ancient (Due: {raw})"
