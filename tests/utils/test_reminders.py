"""Tests for due-date reminders."""

from datetime import date, timedelta

from todotree_cli.utils.reminders import build_due_reminders, tasks_due_on

TODAY = date(2024, 6, 15)
TOMORROW = TODAY + timedelta(days=1)


def test_no_reminders_when_nothing_due(make_task, now):
    tasks = [make_task("a"), make_task("b", due=TODAY + timedelta(days=5))]
    assert build_due_reminders(tasks, now) == []


def test_today_and_tomorrow(make_task, now):
    tasks = [
        make_task("a", title="Pay rent", due=TODAY),
        make_task("b", title="Call mom", due=TOMORROW),
        make_task("c", title="Dentist", due=TOMORROW),
    ]

    today, tomorrow = build_due_reminders(tasks, now)

    assert today.title == "1 task due today!"
    assert today.description == "Pay rent"
    assert today.variant == "warning"
    assert tomorrow.title == "2 tasks due tomorrow"
    assert tomorrow.description == "Call mom, Dentist"
    assert tomorrow.variant == "info"


def test_preview_truncates_titles(make_task, now):
    tasks = [make_task(str(i), title=f"T{i}", due=TODAY) for i in range(5)]

    (reminder,) = build_due_reminders(tasks, now)

    assert reminder.title == "5 tasks due today!"
    assert reminder.description == "T0, T1, T2 and 2 more"


def test_custom_preview(make_task, now):
    tasks = [make_task(str(i), title=f"T{i}", due=TOMORROW) for i in range(3)]
    (reminder,) = build_due_reminders(tasks, now, preview=1)
    assert reminder.description == "T0 and 2 more"


def test_includes_subtasks_and_skips_completed(make_task):
    child = make_task("child", title="Sub", due=TODAY, parent_id="root")
    root = make_task("root", title="Done", due=TODAY, completed=True, subtasks=[child])

    assert [t.id for t in tasks_due_on([root], TODAY)] == ["child"]
