"""Testes das queries/mutations GraphQL de assinaturas."""

from __future__ import annotations

import pytest

from api.connectors.shop0.webhook.models import DeliveryMethod
from api.connectors.shop0.webhook.queries import (
    build_check_query,
    build_query,
    mutation_name,
    parse_check_response,
    parse_mutation_result,
)
from config.settings import ApiVersion
from utils.errors import HttpRequestError, UnsupportedDeliveryMethodError


class TestBuildCheckQuery:
    def test_current_versions_select_endpoint(self) -> None:
        query = build_check_query("ORDERS_CREATE", ApiVersion.OCTOBER21)
        assert "topics: ORDERS_CREATE" in query
        assert "endpoint {" in query
        assert "... on WebhookEventBridgeEndpoint" in query

    def test_legacy_version_selects_callback_url(self) -> None:
        query = build_check_query("ORDERS_CREATE", ApiVersion.APRIL20)
        assert "endpoint" not in query
        assert "callbackUrl" in query


class TestBuildQuery:
    def test_create_http(self) -> None:
        query = build_query(
            "PRODUCTS_CREATE", "https://app.example.com/webhooks", ApiVersion.OCTOBER21
        )
        assert "webhookSubscriptionCreate(topic: PRODUCTS_CREATE" in query
        assert 'callbackUrl: "https://app.example.com/webhooks"' in query

    def test_update_http_uses_id(self) -> None:
        query = build_query(
            "PRODUCTS_CREATE",
            "https://app.example.com/webhooks",
            ApiVersion.OCTOBER21,
            webhook_id="gid://shop0/WebhookSubscription/1",
        )
        assert 'webhookSubscriptionUpdate(id: "gid://shop0/WebhookSubscription/1"' in query
        assert "topic:" not in query

    def test_event_bridge_uses_arn(self) -> None:
        query = build_query(
            "PRODUCTS_CREATE",
            "arn:aws:events:us-east-1::event-source/x",
            ApiVersion.JULY20,
            delivery_method=DeliveryMethod.EVENT_BRIDGE,
        )
        assert "eventBridgeWebhookSubscriptionCreate" in query
        assert 'arn: "arn:aws:events:us-east-1::event-source/x"' in query

    def test_event_bridge_unsupported_before_july20(self) -> None:
        with pytest.raises(UnsupportedDeliveryMethodError, match='"2020-04"'):
            build_query(
                "PRODUCTS_CREATE",
                "arn:x",
                ApiVersion.APRIL20,
                delivery_method=DeliveryMethod.EVENT_BRIDGE,
            )

    @pytest.mark.parametrize(
        ("method", "webhook_id", "expected"),
        [
            (DeliveryMethod.HTTP, None, "webhookSubscriptionCreate"),
            (DeliveryMethod.HTTP, "1", "webhookSubscriptionUpdate"),
            (DeliveryMethod.EVENT_BRIDGE, None, "eventBridgeWebhookSubscriptionCreate"),
            (DeliveryMethod.EVENT_BRIDGE, "1", "eventBridgeWebhookSubscriptionUpdate"),
        ],
    )
    def test_mutation_name(
        self, method: DeliveryMethod, webhook_id: str | None, expected: str
    ) -> None:
        assert mutation_name(method, webhook_id) == expected


class TestParseCheckResponse:
    def test_no_subscription(self) -> None:
        body = {"data": {"webhookSubscriptions": {"edges": []}}}
        assert parse_check_response(body) is None

    def test_http_endpoint(self) -> None:
        body = {
            "data": {
                "webhookSubscriptions": {
                    "edges": [
                        {
                            "node": {
                                "id": "sub-1",
                                "endpoint": {
                                    "__typename": "WebhookHttpEndpoint",
                                    "callbackUrl": "https://app.example.com/webhooks",
                                },
                            }
                        }
                    ]
                }
            }
        }
        node = parse_check_response(body)
        assert node is not None
        assert node.id == "sub-1"
        assert node.address == "https://app.example.com/webhooks"

    def test_event_bridge_endpoint(self) -> None:
        body = {
            "data": {
                "webhookSubscriptions": {
                    "edges": [
                        {
                            "node": {
                                "id": "sub-2",
                                "endpoint": {
                                    "__typename": "WebhookEventBridgeEndpoint",
                                    "arn": "arn:x",
                                },
                            }
                        }
                    ]
                }
            }
        }
        node = parse_check_response(body)
        assert node is not None
        assert node.address == "arn:x"

    def test_legacy_callback_url(self) -> None:
        body = {
            "data": {
                "webhookSubscriptions": {
                    "edges": [{"node": {"id": "sub-3", "callbackUrl": "https://old"}}]
                }
            }
        }
        node = parse_check_response(body)
        assert node is not None
        assert node.address == "https://old"

    def test_unexpected_shape_raises(self) -> None:
        with pytest.raises(HttpRequestError):
            parse_check_response({"errors": [{"message": "boom"}]})


class TestParseMutationResult:
    def test_success(self) -> None:
        body = {
            "data": {
                "webhookSubscriptionCreate": {
                    "userErrors": [],
                    "webhookSubscription": {"id": "sub-1"},
                }
            }
        }
        payload = parse_mutation_result(body, DeliveryMethod.HTTP, None)
        assert payload is not None
        assert payload.succeeded is True

    def test_user_errors(self) -> None:
        body = {
            "data": {
                "webhookSubscriptionUpdate": {
                    "userErrors": [{"field": ["callbackUrl"], "message": "invalid"}],
                    "webhookSubscription": None,
                }
            }
        }
        payload = parse_mutation_result(body, DeliveryMethod.HTTP, "sub-1")
        assert payload is not None
        assert payload.succeeded is False
        assert payload.user_errors[0].message == "invalid"

    def test_wrong_mutation_key_is_none(self) -> None:
        body = {"data": {"webhookSubscriptionCreate": {"webhookSubscription": {"id": "x"}}}}
        assert parse_mutation_result(body, DeliveryMethod.HTTP, "sub-1") is None

    def test_missing_data_is_none(self) -> None:
        assert parse_mutation_result({"errors": "nope"}, DeliveryMethod.HTTP, None) is None
