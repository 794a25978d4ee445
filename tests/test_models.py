"""
tests/test_models.py
─────────────────────
Tests unitarios para database/models.py
"""

from datetime import date, datetime, timezone

from database.models import Payment, Service, Transaction, parse_datetime

USER_ID = "user-uuid-1234"


def _make_service_row(**kwargs) -> dict:
    row = {
        "id": 1,
        "user_id": USER_ID,
        "name": "Netflix",
        "amount": "8500.00",
        "due_date": "2026-03-10T12:00:00+00:00",
        "frequency": "monthly",
        "status": "pending",
        "category": "Entretenimiento",
        "payment_link": None,
        "created_at": "2026-03-01T09:30:00+00:00",
    }
    row.update(kwargs)
    return row


class TestParseDatetime:
    def test_aware_string(self):
        dt = parse_datetime("2026-03-10T12:00:00+00:00")
        assert dt == datetime(2026, 3, 10, 12, tzinfo=timezone.utc)

    def test_naive_string_assumed_utc(self):
        dt = parse_datetime("2026-03-10T12:00:00")
        assert dt.tzinfo is not None
        assert dt.utcoffset().total_seconds() == 0

    def test_none(self):
        assert parse_datetime(None) is None


class TestService:
    def test_from_dict(self):
        service = Service.from_dict(_make_service_row())
        assert service.id == 1
        assert service.amount == 8500.0
        assert service.due_date == datetime(2026, 3, 10, 12, tzinfo=timezone.utc)
        assert service.status == "pending"
        assert service.is_monthly

    def test_from_dict_defaults(self):
        service = Service.from_dict(_make_service_row(status=None, category=None))
        assert service.status == "pending"
        assert service.category == "Otros"

    def test_to_dict(self):
        d = Service.from_dict(_make_service_row(id=99, payment_link="https://netflix.com/pagar")).to_dict()
        assert "id" not in d  # no se persiste el id en insert
        assert d["due_date"] == "2026-03-10T12:00:00+00:00"
        assert d["payment_link"] == "https://netflix.com/pagar"


class TestTransaction:
    def test_from_dict(self):
        data = {
            "id": 7,
            "user_id": USER_ID,
            "amount": "8500.00",
            "category": "Entretenimiento",
            "description": "Pago de servicio: Netflix",
            "type": "expense",
            "date": "2026-03-12",
            "is_recurring": False,
            "frequency": "monthly",
            "service_id": 1,
        }
        tx = Transaction.from_dict(data)
        assert tx.amount == 8500.0
        assert tx.date == date(2026, 3, 12)
        assert tx.service_id == 1
        assert tx.frequency == "monthly"

    def test_to_dict_without_service(self):
        tx = Transaction(
            user_id=USER_ID, amount=500.0, category="Otros",
            description="colectivo", type="expense", date=date(2026, 2, 21),
        )
        d = tx.to_dict()
        assert d["date"] == "2026-02-21"
        assert "service_id" not in d
        assert "id" not in d


class TestPayment:
    def test_roundtrip_fields(self):
        payment = Payment.from_dict({
            "id": 3,
            "user_id": USER_ID,
            "service_id": 1,
            "amount": 8500,
            "paid_at": "2026-03-09T15:00:00Z",
        })
        assert payment.paid_at == datetime(2026, 3, 9, 15, tzinfo=timezone.utc)
        assert payment.to_dict()["paid_at"] == "2026-03-09T15:00:00+00:00"
