from .tables import Base, BlockedSlots, Bookings, Closures, metadata

__all__ = ["Base", "BlockedSlots", "Bookings", "Closures", "metadata"]
