"""Builder de getStats."""

from __future__ import annotations

from datetime import datetime

from api.payload_builders.crypto_pay.base import FieldSpec, RequestBuilder
from api.payload_builders.crypto_pay.requests import GetStatsRequest
from api.validators.crypto_pay.cross_field import date_order
from api.validators.crypto_pay.normalizers import to_datetime


class GetStatsBuilder(RequestBuilder[GetStatsRequest]):
    """Builder de getStats; sem datas a API usa as últimas 24h."""

    request_model = GetStatsRequest
    fields = (
        FieldSpec("start_at", to_datetime),
        FieldSpec("end_at", to_datetime),
    )
    rules = (date_order("start_at", "end_at"),)

    def start_at(self, value: datetime | str) -> GetStatsBuilder:
        return self.with_field("start_at", value)

    def end_at(self, value: datetime | str) -> GetStatsBuilder:
        return self.with_field("end_at", value)
