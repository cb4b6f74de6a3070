"""
Scripted runs of the interactive menu with patched input() and getpass().
"""
import builtins

import pytest

import cli
from accounts.errors import StorageIOError
from accounts.manager import UserStore
from accounts.session import Session
from accounts.storage import TextFileStorage
from settings import AppConfig


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "users.txt"


@pytest.fixture
def store(data_file):
    return UserStore.load(TextFileStorage(str(data_file)))


def script(monkeypatch, inputs, passwords=()):
    """Feed `inputs` to input() and `passwords` to getpass(), in order."""
    inputs = iter(inputs)
    passwords = iter(passwords)

    def fake_input(prompt=""):
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)
    monkeypatch.setattr(cli, "getpass", lambda prompt="": next(passwords))


def test_full_booking_session(monkeypatch, capsys, store, data_file):
    print("\n" + "=" * 70)
    print("TEST: SCRIPTED MENU SESSION")
    print("=" * 70)

    script(
        monkeypatch,
        ["1", "alice",                # register
         "2", "alice",                # login
         "1", "3", "1", "2",          # book Bangkok, confirm, 2 tickets
         "2",                         # check total
         "3",                         # cancel
         "0"],
        ["pw1", "pw1"],
    )
    cli.run(store)
    out = capsys.readouterr().out

    assert "Account created: alice" in out
    assert "Welcome back, alice!" in out
    assert "Booking completed successfully!" in out
    assert "2 ticket(s) booked for a total of Rs 500,000 for destination Bangkok, Thailand." in out
    assert "A refund of Rs 500,000 will be processed." in out
    assert "Goodbye!" in out

    alice = UserStore.load(TextFileStorage(str(data_file))).find_by_username("alice")
    assert alice is not None
    assert not alice.has_booking()


def test_login_messages_are_distinct(monkeypatch, capsys, store):
    store.register("alice", "pw1")
    script(monkeypatch, ["2", "alice", "2", "ghost", "0"], ["bad", "pw1"])
    cli.run(store)
    out = capsys.readouterr().out

    assert "Wrong password! Access denied." in out
    assert "User 'ghost' not found! Please register first." in out
    assert "Logged in as" not in out


def test_duplicate_registration_reported(monkeypatch, capsys, store):
    script(monkeypatch, ["1", "bob", "1", "bob", "0"], ["pw2", "pw2"])
    cli.run(store)
    out = capsys.readouterr().out

    assert "Username 'bob' already exists." in out
    assert len(store) == 1


def test_declined_booking_changes_nothing(monkeypatch, capsys, store):
    alice = store.register("alice", "pw1")
    session = Session.anonymous().login(store, "alice", "pw1")

    script(monkeypatch, ["5", "2"])
    cli.handle_book(store, session)
    assert "Booking not confirmed" in capsys.readouterr().out
    assert not alice.has_booking()


def test_booking_input_errors(monkeypatch, capsys, store):
    alice = store.register("alice", "pw1")
    session = Session.anonymous().login(store, "alice", "pw1")

    script(monkeypatch, ["abc"])
    cli.handle_book(store, session)
    assert "Invalid input" in capsys.readouterr().out

    script(monkeypatch, ["42", "1"])
    cli.handle_book(store, session)
    assert "Invalid tour code number: 42" in capsys.readouterr().out

    script(monkeypatch, ["7", "1", "0"])
    cli.handle_book(store, session)
    assert "Number of tickets must be at least 1." in capsys.readouterr().out
    assert not alice.has_booking()

    store.book(alice, 7, 1)
    cli.handle_book(store, session)
    assert "already have an active booking" in capsys.readouterr().out


def test_check_total_and_cancel_without_booking(capsys, store):
    store.register("alice", "pw1")
    session = Session.anonymous().login(store, "alice", "pw1")

    cli.handle_check_total(store, session)
    cli.handle_cancel(store, session)
    out = capsys.readouterr().out
    assert "No ticket booked!" in out
    assert "No tour has been booked!" in out


def test_change_password_flow(monkeypatch, capsys, store):
    alice = store.register("alice", "pw1")
    session = Session.anonymous().login(store, "alice", "pw1")

    script(monkeypatch, [], ["wrong"])
    cli.handle_change_password(store, session)
    assert "Password was not changed" in capsys.readouterr().out
    assert alice.password == "pw1"

    script(monkeypatch, [], ["pw1", "new", "different"])
    cli.handle_change_password(store, session)
    assert "Passwords don't match" in capsys.readouterr().out
    assert alice.password == "pw1"

    script(monkeypatch, [], ["pw1", "new", "new"])
    cli.handle_change_password(store, session)
    assert "Password updated successfully!" in capsys.readouterr().out
    assert alice.password == "new"


def test_logout_returns_to_anonymous_menu(monkeypatch, capsys, store):
    store.register("alice", "pw1")
    session = Session.anonymous().login(store, "alice", "pw1")

    session = cli.dispatch("5", store, session)
    assert session == Session.anonymous()
    assert "Logged out from alice" in capsys.readouterr().out

    # anonymous menu has no logout entry
    assert cli.dispatch("5", store, session) == session
    assert "Invalid choice" in capsys.readouterr().out
    assert cli.dispatch("0", store, session) is None


def test_show_catalog_from_both_menus(capsys, store):
    store.register("alice", "pw1")
    cli.dispatch("3", store, Session.anonymous())
    cli.dispatch("6", store, Session.anonymous().login(store, "alice", "pw1"))
    out = capsys.readouterr().out
    assert out.count("Paris, France") == 2


def test_eof_exits_cleanly(monkeypatch, capsys, store):
    script(monkeypatch, [])
    cli.run(store)
    assert "Goodbye!" in capsys.readouterr().out


def test_unreadable_database_starts_empty(capsys, data_file):
    data_file.write_text("garbage\n", encoding="utf-8")
    store = cli.create_user_store(AppConfig(data_file=str(data_file)))

    assert len(store) == 0
    assert "Starting with an empty list" in capsys.readouterr().out


def test_non_utf8_database_starts_empty(capsys, data_file):
    data_file.write_bytes(b"alice caf\xe9 N/A 0.000000 0\n")
    store = cli.create_user_store(AppConfig(data_file=str(data_file)))

    assert len(store) == 0
    assert "Starting with an empty list" in capsys.readouterr().out


def test_save_failures_still_report_results(monkeypatch, capsys, caplog, store):
    print("\n" + "=" * 70)
    print("TEST: MENU SESSION WITH A READ-ONLY DATABASE")
    print("=" * 70)

    def failing_save(self, users):
        raise StorageIOError("Could not write users.txt: disk full")

    monkeypatch.setattr(TextFileStorage, "save_users", failing_save)
    script(
        monkeypatch,
        ["1", "alice",                # register
         "2", "alice",                # login
         "1", "3", "1", "2",          # book Bangkok, confirm, 2 tickets
         "3",                         # cancel
         "4",                         # change password
         "0"],
        ["pw1", "pw1", "pw1", "pw2", "pw2"],
    )
    with caplog.at_level("ERROR", logger="cli"):
        cli.run(store)
    out = capsys.readouterr().out

    assert out.count("Change kept for this session but not saved") == 4
    print("   [OK] Every failed save was shown")
    assert "Account created: alice" in out
    assert "Welcome back, alice!" in out
    assert "Booking completed successfully!" in out
    assert "A refund of Rs 500,000 will be processed." in out
    assert "Password updated successfully!" in out
    print("   [OK] Results were still reported")

    alice = store.find_by_username("alice")
    assert not alice.has_booking()
    assert alice.password == "pw2"
    assert sum("Could not save user database" in r.getMessage() for r in caplog.records) == 4
    print("   [OK] Failures were logged")
