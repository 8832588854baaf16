from .tables import Base, Courts, Reservations, SportTypes, UserProfiles, metadata

__all__ = [
    "Base",
    "metadata",
    "SportTypes",
    "Courts",
    "UserProfiles",
    "Reservations",
]
