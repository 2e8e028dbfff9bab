from schemas.response import CamelModel


class StatusResponse(CamelModel):
    is_open: bool
    message: str
    status: str
    next_status: str
    next_time: str
    current_time: str
    day_name: str


class AnnualSavingsResponse(CamelModel):
    monthly_price: float
    yearly_price: int
    savings: int
    discount_percentage: int
    billing_cycle: str
