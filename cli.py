"""
Command-line interface for the tour booking system.

Provides text-based menus for:
- Account registration and login
- Browsing the tour catalog
- Booking a tour and checking its total cost
- Cancelling a booking with a refund
- Changing the account password
"""

import logging
from getpass import getpass
from typing import Optional

from accounts.errors import AlreadyBooked, StorageIOError, TourBookingError
from accounts.manager import UserStore
from accounts.session import Session
from accounts.storage import TextFileStorage
from settings import AppConfig
from tours.catalog import format_catalog, format_price, get_package

logger = logging.getLogger(__name__)


def create_user_store(config: AppConfig) -> UserStore:
    storage = TextFileStorage(config.data_file)
    try:
        return UserStore.load(storage)
    except StorageIOError as e:
        logger.error("Could not load user database: %s", e)
        print(f"⚠️ Could not load saved users ({e}). Starting with an empty list.")
        return UserStore(storage)


def print_menu(session: Session) -> None:
    print("\n" + "=" * 50)
    if session.is_authenticated:
        print(f"  ✈️ Tour Booking - Logged in as: {session.username}")
    else:
        print("  ✈️ Tour Booking")
    print("=" * 50)

    if not session.is_authenticated:
        print("  1) Register")
        print("  2) Log in")
        print("  3) Show tour packages")
        print("  0) Exit")
    else:
        print("  1) Book a tour")
        print("  2) Check total")
        print("  3) Cancel booking")
        print("  4) Change password")
        print("  5) Log out")
        print("  6) Show tour packages")
        print("  0) Exit")
    print("=" * 50)


def report_save_failure(e: StorageIOError) -> None:
    logger.error("Could not save user database: %s", e)
    print(f"⚠️ Change kept for this session but not saved: {e}")


def read_int(prompt: str) -> Optional[int]:
    """Prompt for an integer; prints an error and returns None on bad input."""
    raw = input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        print("❌ Invalid input, please enter a number")
        return None


def handle_show_catalog() -> None:
    print()
    print(format_catalog())


def handle_register(store: UserStore) -> None:
    print("\n📝 Create New Account")
    username = input("Username: ").strip()
    if not username:
        print("❌ Username cannot be empty")
        return

    password = getpass("Password: ")
    try:
        store.register(username, password)
    except StorageIOError as e:
        report_save_failure(e)
    except TourBookingError as e:
        print(f"❌ Error: {e}")
        return
    print(f"✅ Account created: {username}")


def handle_login(store: UserStore, session: Session) -> Session:
    print("\n🔑 Login")
    username = input("Username: ").strip()
    password = getpass("Password: ")

    try:
        session = session.login(store, username, password)
    except TourBookingError as e:
        print(f"❌ {e}")
        return session
    print(f"✅ Welcome back, {session.username}!")
    logger.info("User '%s' logged in", session.username)
    return session


def handle_book(store: UserStore, session: Session) -> None:
    print("\n🎫 Book a Tour")
    user = session.current_user(store)
    if user.has_booking():
        print(f"❌ {AlreadyBooked(user.booked_place)}")
        return

    handle_show_catalog()
    code = read_int("\nEnter the tour code number: ")
    if code is None:
        return

    print("\nConfirm booking?\n  1. Yes\n  2. No")
    if input("Enter your choice: ").strip() != "1":
        print("   Booking not confirmed")
        return

    try:
        package = get_package(code)
    except TourBookingError as e:
        print(f"❌ {e}")
        return

    count = read_int("Enter the number of tickets for booking: ")
    if count is None:
        return

    try:
        store.book(user, package.code, count)
    except StorageIOError as e:
        report_save_failure(e)
    except TourBookingError as e:
        print(f"❌ {e}")
        return
    print("✅ Booking completed successfully!")
    print(f"   📍 {package.name}: {count} ticket(s) at {format_price(package.price)} each")


def handle_check_total(store: UserStore, session: Session) -> None:
    user = session.current_user(store)
    try:
        total = store.total_cost(user)
    except TourBookingError:
        print("\nNo ticket booked!")
        return
    print(f"\n{user.ticket_count} ticket(s) booked for a total of "
          f"{format_price(total)} for destination {user.booked_place}.")


def handle_cancel(store: UserStore, session: Session) -> None:
    print("\n🗑️ Cancel Booking")
    user = session.current_user(store)
    place, count = user.booked_place, user.ticket_count
    refund = user.price_per_ticket * count
    try:
        store.cancel(user)
    except StorageIOError as e:
        report_save_failure(e)
    except TourBookingError as e:
        print(f"❌ {e}")
        return
    print(f"✅ Your booking for {place} ({count} ticket(s)) has been cancelled.")
    print(f"   A refund of {format_price(refund)} will be processed.")


def handle_change_password(store: UserStore, session: Session) -> None:
    print("\n🔒 Change Password")
    user = session.current_user(store)
    current = getpass("Current password: ")
    if current != user.password:
        print("❌ Incorrect password provided. Password was not changed.")
        return

    new = getpass("New password: ")
    confirm = getpass("Confirm new password: ")
    if new != confirm:
        print("❌ Passwords don't match")
        return

    try:
        store.change_password(user, current, new)
    except StorageIOError as e:
        report_save_failure(e)
    except TourBookingError as e:
        print(f"❌ {e}")
        return
    print("✅ Password updated successfully!")


def handle_logout(session: Session) -> Session:
    try:
        new_session = session.logout()
    except TourBookingError as e:
        print(f"❌ {e}")
        return session
    print(f"\n👋 Logged out from {session.username}")
    logger.info("User '%s' logged out", session.username)
    return new_session


def dispatch(choice: str, store: UserStore, session: Session) -> Optional[Session]:
    """
    Run one menu choice. Returns the session to continue with, or None
    when the user asked to exit.
    """
    if choice == "0":
        return None

    if not session.is_authenticated:
        if choice == "1":
            handle_register(store)
        elif choice == "2":
            session = handle_login(store, session)
        elif choice == "3":
            handle_show_catalog()
        else:
            print("❌ Invalid choice")
        return session

    if choice == "1":
        handle_book(store, session)
    elif choice == "2":
        handle_check_total(store, session)
    elif choice == "3":
        handle_cancel(store, session)
    elif choice == "4":
        handle_change_password(store, session)
    elif choice == "5":
        session = handle_logout(session)
    elif choice == "6":
        handle_show_catalog()
    else:
        print("❌ Invalid choice")
    return session


def run(store: UserStore) -> None:
    session = Session.anonymous()

    print("\n✈️ Tour Management System")
    print("   Register • Book • Travel\n")

    while True:
        print_menu(session)
        try:
            choice = input("> ").strip()
            next_session = dispatch(choice, store, session)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if next_session is None:
            break
        session = next_session

    print("\nGoodbye! 👋")


def main(config: Optional[AppConfig] = None) -> None:
    config = config or AppConfig()
    store = create_user_store(config)
    logger.info("Loaded %d user(s) from %s", len(store), config.data_file)
    run(store)


if __name__ == "__main__":
    main()
