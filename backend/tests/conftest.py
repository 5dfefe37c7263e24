"""Pytest configuration and fixtures for RV Stay backend tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto
- Sample listing, booking and day-metadata items
"""

import os
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-rvstay")

# Only set fake credentials for moto if no real credentials are present
if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

TABLE_PREFIX = "test-rvstay"


# === Singleton Fixtures ===


@pytest.fixture(autouse=True)
def reset_service_singletons() -> Generator[None, None, None]:
    """Reset cached services and the DynamoDB singleton around each test.

    Tests using mock_aws then get a fresh service instance inside the mock
    context rather than one built against a previous context.
    """
    from rvstay_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


# === DynamoDB Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    if not os.environ.get("AWS_PROFILE"):
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"
    os.environ["DYNAMODB_TABLE_PREFIX"] = TABLE_PREFIX


@pytest.fixture
def dynamodb_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Create a mocked DynamoDB client."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="eu-west-1")
        yield client


@pytest.fixture
def create_tables(dynamodb_client: Any) -> None:
    """Create all RV Stay tables for testing."""
    tables = [
        {
            "TableName": f"{TABLE_PREFIX}-listings",
            "KeySchema": [{"AttributeName": "listing_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "listing_id", "AttributeType": "S"},
                {"AttributeName": "host_id", "AttributeType": "S"},
            ],
            "GlobalSecondaryIndexes": [
                {
                    "IndexName": "host_id-index",
                    "KeySchema": [{"AttributeName": "host_id", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-bookings",
            "KeySchema": [{"AttributeName": "booking_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "booking_id", "AttributeType": "S"},
                {"AttributeName": "listing_id", "AttributeType": "S"},
                {"AttributeName": "check_in", "AttributeType": "S"},
            ],
            "GlobalSecondaryIndexes": [
                {
                    "IndexName": "listing_id-index",
                    "KeySchema": [
                        {"AttributeName": "listing_id", "KeyType": "HASH"},
                        {"AttributeName": "check_in", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-day-meta",
            "KeySchema": [{"AttributeName": "meta_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "meta_id", "AttributeType": "S"},
                {"AttributeName": "listing_id", "AttributeType": "S"},
                {"AttributeName": "date", "AttributeType": "S"},
            ],
            "GlobalSecondaryIndexes": [
                {
                    "IndexName": "listing_id-index",
                    "KeySchema": [
                        {"AttributeName": "listing_id", "KeyType": "HASH"},
                        {"AttributeName": "date", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-booking-nights",
            "KeySchema": [{"AttributeName": "night_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "night_id", "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
    ]

    for table_config in tables:
        dynamodb_client.create_table(**table_config)


@pytest.fixture
def db(create_tables: None) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from rvstay.services.dynamodb import DynamoDBService

    return DynamoDBService()


# === Sample Data Fixtures ===


@pytest.fixture
def sample_listing_item() -> dict[str, Any]:
    """Listing stored with the current price + pricing_type schema."""
    return {
        "listing_id": "LST-LAKESIDE",
        "host_id": "host-sub-1",
        "title": "Lakeside pull-through",
        "city": "Austin",
        "state": "TX",
        "price": Decimal("50"),
        "pricing_type": "Night",
        "max_length_ft": 40,
        "hookups": "Full",
        "power": "30A/50A",
        "water": "Yes",
        "sewer": "Yes",
        "laundry": "Washer/Dryer",
        "wifi": True,
        "pets_allowed": True,
        "description": "Shaded spot a short walk from the lake.",
        "nearby_attractions": "Lady Bird Lake",
        "created_at": datetime(2025, 1, 10, tzinfo=timezone.utc).isoformat(),
    }


@pytest.fixture
def legacy_listing_item() -> dict[str, Any]:
    """Listing stored under the legacy pricePerNight schema."""
    return {
        "listing_id": "LST-LEGACY",
        "hostId": "host-sub-2",
        "title": "Desert pad",
        "city": "Moab",
        "state": "UT",
        "pricePerNight": Decimal("40"),
        "maxLengthFt": 30,
        "hookups": "Partial",
        "power": "30A",
        "sewer": "Dump station",
    }


@pytest.fixture
def sample_booking_item() -> dict[str, Any]:
    """Booking item as stored in DynamoDB."""
    return {
        "booking_id": "BKG-2025-AAAA1111",
        "listing_id": "LST-LAKESIDE",
        "check_in": "2025-07-15",
        "check_out": "2025-07-18",
        "status": "requested",
        "stay_type": "RV",
        "nights": Decimal("3"),
        "estimated_total": Decimal("150"),
        "note": "Arriving after 6pm",
        "guest_id": "guest-sub-9",
        "guest_name": "Sam Rivera",
        "created_at": datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc).isoformat(),
        "updated_at": datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc).isoformat(),
    }
