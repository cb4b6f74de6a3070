"""User accounts, bookings and their on-disk store."""
