"""
Pydantic models for stats
"""

from pydantic import BaseModel
from typing import Dict


class StatsResponse(BaseModel):
    total_contracts: int
    verified_contracts: int
    total_publishers: int
    contracts_by_network: Dict[str, int] = {}
