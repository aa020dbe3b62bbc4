# rental_market/schemas/dashboard.py
from rental_market.schemas.rental_item import RentalItemOut
from rental_market.schemas.rental_request import RentalRequestOut


class DashboardItemOut(RentalItemOut):
    # latest requests for this listing, newest first
    recent_requests: list[RentalRequestOut] = []
