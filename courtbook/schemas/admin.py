# courtbook/schemas/admin.py

from pydantic import BaseModel


class AdminStats(BaseModel):
    total_reservations: int
    active_reservations: int
    total_courts: int
    total_users: int
    today_reservations: int
    revenue: float
