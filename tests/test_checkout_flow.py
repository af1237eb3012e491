"""Tests for the client-side checkout flow against the running app."""

import httpx
import pytest
from sqlmodel import select

from gallery.client.cart import CartStore
from gallery.client.checkout import CheckoutError, CheckoutFlow
from gallery.models.transaction import Transaction


def cart_with(*artworks):
    cart = CartStore()
    for a in artworks:
        cart.add_item({"id": a.id, "title": a.title, "price": str(a.price)})
    return cart


class TestPreconditions:
    def test_empty_cart(self, client, user_token):
        flow = CheckoutFlow(CartStore(), client, access_token=user_token)

        with pytest.raises(CheckoutError, match="Your cart is empty"):
            flow.submit("0712345678")

    def test_not_logged_in(self, client, artworks):
        flow = CheckoutFlow(cart_with(artworks[0]), client)

        with pytest.raises(CheckoutError, match="Please log in to continue"):
            flow.submit("0712345678")


class TestSubmit:
    def test_success_clears_cart_and_calls_back(self, client, session, artworks, user_token):
        cart = cart_with(artworks[0], artworks[1])
        received = []
        flow = CheckoutFlow(cart, client, access_token=user_token)

        result = flow.submit("0712345678", on_success=received.append)

        assert result.success is True
        assert result.data["artworkIds"] == [artworks[0].id, artworks[1].id]
        assert result.data["amount"] == 350
        assert received == [result.data]
        assert cart.count == 0

    def test_unavailable_artwork_keeps_cart(self, client, session, artworks, user_token):
        cart = cart_with(artworks[0], artworks[3])
        flow = CheckoutFlow(cart, client, access_token=user_token)

        result = flow.submit("0712345678")

        assert result.success is False
        assert "not found or are unavailable" in result.message
        assert cart.artwork_ids == [artworks[0].id, artworks[3].id]
        assert session.exec(select(Transaction)).all() == []

    def test_declined_payment_keeps_cart(self, client, gateway, artworks, user_token):
        gateway.succeed = False
        cart = cart_with(artworks[2])
        flow = CheckoutFlow(cart, client, access_token=user_token)

        result = flow.submit("0712345678")

        assert result.success is False
        assert result.message == "Payment failed. Please try again."
        assert result.error == "INSUFFICIENT_FUNDS"
        assert cart.count == 1

    def test_network_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.Client(
            base_url="http://gallery.invalid/api",
            transport=httpx.MockTransport(refuse),
        )
        cart = CartStore()
        cart.add_item({"id": 1, "price": 100})
        flow = CheckoutFlow(cart, http, access_token="token")

        result = flow.submit("0712345678")

        assert result.success is False
        assert result.message == "Network error. Please try again."
        assert cart.count == 1

    def test_posts_camel_case_payload(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = request.read()
            return httpx.Response(
                200,
                json={"success": True, "data": {"transactionId": "TXN1"}},
            )

        http = httpx.Client(
            base_url="http://gallery.invalid/api",
            transport=httpx.MockTransport(handler),
        )
        cart = CartStore()
        cart.add_item({"id": 4, "price": 100})
        flow = CheckoutFlow(cart, http, access_token="abc")

        result = flow.submit("0700000000")

        assert result.success
        assert seen["path"] == "/api/payment/simulate"
        assert seen["auth"] == "Bearer abc"
        assert b'"artworkIds":[4]' in seen["body"].replace(b" ", b"")
        assert b'"phoneNumber":"0700000000"' in seen["body"].replace(b" ", b"")
