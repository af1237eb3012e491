"""Tests for POST /payment/simulate and transaction listings."""

import json
import random
import re
from decimal import Decimal

from sqlalchemy.exc import OperationalError
from sqlmodel import select

from gallery.core.payment_gateway import SimulatedStkGateway
from gallery.models.artwork import Artwork
from gallery.models.transaction import Transaction
from gallery.routers import payment as payment_router
from gallery.services.payment_service import generate_transaction_id


def pay(client, headers, artwork_ids, phone="0712345678"):
    return client.post(
        "/payment/simulate",
        json={"phoneNumber": phone, "artworkIds": artwork_ids},
        headers=headers,
    )


def availability(session, artworks):
    session.expire_all()
    return [session.get(Artwork, a.id).is_available for a in artworks]


class TestSimulatePayment:
    def test_requires_auth(self, client, artworks):
        response = pay(client, {}, [artworks[0].id])

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_success_records_one_completed_transaction(
        self, client, session, gateway, artworks, user, user_headers
    ):
        ids = [artworks[0].id, artworks[1].id]

        response = pay(client, user_headers, ids)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["transactionId"].startswith("TXN")
        assert data["artworkIds"] == ids
        assert data["status"] == "completed"
        assert data["amount"] == 350
        assert data["phoneNumber"] == "0712345678"

        transactions = session.exec(select(Transaction)).all()
        assert len(transactions) == 1
        assert transactions[0].status == "completed"
        assert transactions[0].user_id == user.id
        assert json.loads(transactions[0].artwork_ids) == ids
        assert availability(session, artworks[:2]) == [False, False]
        assert len(gateway.calls) == 1

    def test_amount_comes_from_database_prices(self, client, session, gateway, artworks, user_headers):
        artworks[2].price = Decimal("410.00")
        session.add(artworks[2])
        session.commit()

        response = client.post(
            "/payment/simulate",
            json={"phoneNumber": "0712345678", "artworkIds": [artworks[2].id], "amount": 1},
            headers=user_headers,
        )
        assert response.status_code == 400  # unknown field rejected

        response = pay(client, user_headers, [artworks[2].id])
        assert response.json()["data"]["amount"] == 410
        assert gateway.calls[0][2] == Decimal("410.00")

    def test_unknown_artwork_is_404_and_writes_nothing(self, client, session, gateway, user_headers):
        response = pay(client, user_headers, [999])

        assert response.status_code == 404
        assert "999" in response.json()["message"]
        assert session.exec(select(Transaction)).all() == []
        assert gateway.calls == []

    def test_sold_artwork_is_404_and_nothing_changes(
        self, client, session, gateway, artworks, user_headers
    ):
        response = pay(client, user_headers, [artworks[0].id, artworks[3].id])

        assert response.status_code == 404
        assert response.json()["message"] == (
            f"Some artworks not found or are unavailable: IDs {artworks[3].id}"
        )
        assert session.exec(select(Transaction)).all() == []
        assert availability(session, artworks) == [True, True, True, False]
        assert gateway.calls == []

    def test_second_purchase_of_same_artwork_fails(self, client, artworks, user_headers):
        assert pay(client, user_headers, [artworks[0].id]).status_code == 200

        response = pay(client, user_headers, [artworks[0].id])

        assert response.status_code == 404

    def test_decline_marks_failed_and_releases_artworks(
        self, client, session, gateway, artworks, user_headers
    ):
        gateway.succeed = False
        ids = [artworks[0].id, artworks[2].id]

        response = pay(client, user_headers, ids)

        assert response.status_code == 400
        body = response.json()
        assert body == {
            "success": False,
            "message": "Payment failed. Please try again.",
            "error": "INSUFFICIENT_FUNDS",
        }
        transactions = session.exec(select(Transaction)).all()
        assert [t.status for t in transactions] == ["failed"]
        assert availability(session, artworks) == [True, True, True, False]

    def test_settle_failure_after_charge_reports_pending(
        self, client, session, artworks, user_headers, monkeypatch
    ):
        def broken_settle(*args, **kwargs):
            raise OperationalError("UPDATE transactions", {}, Exception("db gone"))

        monkeypatch.setattr(payment_router.service, "_settle", broken_settle)

        response = pay(client, user_headers, [artworks[1].id])

        assert response.status_code == 500
        message = response.json()["message"]
        assert message.startswith("Payment received but confirmation is still pending. Reference: TXN")

        transaction = session.exec(select(Transaction)).one()
        assert transaction.status == "pending"
        assert message.endswith(transaction.id)
        assert availability(session, [artworks[1]]) == [False]

    def test_gateway_error_reports_unknown_status(
        self, client, session, gateway, artworks, user_headers, monkeypatch
    ):
        def unreachable(reference, phone_number, amount):
            raise ConnectionError("gateway timed out")

        monkeypatch.setattr(gateway, "charge", unreachable)

        response = pay(client, user_headers, [artworks[0].id])

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"].startswith("Payment status unknown. Reference: TXN")

        transaction = session.exec(select(Transaction)).one()
        assert transaction.status == "pending"
        assert body["message"].endswith(transaction.id)
        assert availability(session, [artworks[0]]) == [False]


class TestPaymentValidation:
    def test_missing_phone(self, client, artworks, user_headers):
        response = client.post(
            "/payment/simulate", json={"artworkIds": [artworks[0].id]}, headers=user_headers
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Missing or invalid required fields")
        assert "phoneNumber" in response.json()["message"]

    def test_blank_phone(self, client, artworks, user_headers):
        assert pay(client, user_headers, [artworks[0].id], phone="   ").status_code == 400

    def test_empty_ids(self, client, user_headers):
        assert pay(client, user_headers, []).status_code == 400

    def test_non_integer_ids(self, client, user_headers):
        assert pay(client, user_headers, ["1"]).status_code == 400
        assert pay(client, user_headers, [True]).status_code == 400

    def test_duplicate_ids(self, client, artworks, user_headers):
        assert pay(client, user_headers, [artworks[0].id, artworks[0].id]).status_code == 400


class TestTransactionHistory:
    def test_user_sees_own_transactions(self, client, artworks, user_headers, admin_headers):
        pay(client, user_headers, [artworks[0].id])
        pay(client, admin_headers, [artworks[1].id])

        response = client.get("/payment/transactions", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["data"][0]["artworkIds"] == [artworks[0].id]

    def test_admin_lists_all_and_filters_by_status(
        self, client, gateway, artworks, user_headers, admin_headers
    ):
        pay(client, user_headers, [artworks[0].id])
        gateway.succeed = False
        pay(client, user_headers, [artworks[1].id])

        everything = client.get("/admin/transactions", headers=admin_headers).json()
        failed = client.get(
            "/admin/transactions", params={"status": "failed"}, headers=admin_headers
        ).json()

        assert everything["total"] == 2
        assert [t["status"] for t in failed["data"]] == ["failed"]

    def test_admin_transactions_forbidden_for_users(self, client, user_headers):
        assert client.get("/admin/transactions", headers=user_headers).status_code == 403


class TestGateway:
    def test_transaction_id_format(self):
        txn = generate_transaction_id()

        assert re.fullmatch(r"TXN\d{13}[0-9A-F]{8}", txn)

    def test_transaction_ids_do_not_collide(self):
        ids = {generate_transaction_id() for _ in range(1000)}

        assert len(ids) == 1000

    def test_simulated_gateway_is_deterministic_with_seeded_rng(self):
        always = SimulatedStkGateway(delay_seconds=0, success_rate=1.0)
        never = SimulatedStkGateway(delay_seconds=0, success_rate=0.0, rng=random.Random(1))

        assert always.charge("TXN1", "07", Decimal("1")).success is True
        declined = never.charge("TXN2", "07", Decimal("1"))
        assert declined.success is False
        assert declined.error_code == "INSUFFICIENT_FUNDS"
