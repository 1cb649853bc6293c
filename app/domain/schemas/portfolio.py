from pydantic import BaseModel


class PortfolioDisplaySchema(BaseModel):
    total_invested: str
    total_value: str
    total_gain_loss: str
    gain_loss_percent: str


class PortfolioStatsSchema(BaseModel):
    total_invested: float
    total_value: float
    total_gain_loss: float
    gain_loss_percent: float
    total_holdings: int
    display: PortfolioDisplaySchema
