"""
Pydantic response models for the revenue forecast payload.

Provides type-safe response models with automatic validation and documentation.
"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class HistoricalPointResponse(BaseModel):
    """Aggregated revenue for one month."""
    model_config = ConfigDict(populate_by_name=True)

    period: str = Field(alias="_id", description="Month key (YYYY-MM)")
    revenue: float = Field(description="Total revenue for the month")
    orders: int = Field(ge=0, description="Number of orders in the month")


class PredictionResponse(BaseModel):
    """Forecast for one future month."""
    month: str = Field(description="Month name, e.g. July")
    year: int
    revenue: float = Field(ge=10, description="Predicted revenue")
    confidence: float = Field(ge=40, le=100, description="Confidence percentage")


class RevenueForecastResponse(BaseModel):
    """Revenue prediction widget payload."""
    historicalData: List[HistoricalPointResponse] = Field(default_factory=list)
    predictions: List[PredictionResponse] = Field(default_factory=list)
    growthRate: float = Field(ge=-0.15, le=0.25, description="Month-over-month growth rate")
