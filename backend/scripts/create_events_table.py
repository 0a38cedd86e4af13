#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from medtracker.core.config import get_settings
from medtracker.services.filters import SUBJECT_KEY_ATTR, TIMESTAMP_ATTR


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Create the DynamoDB table that stores medical events.",
    )
    parser.add_argument(
        "--table-name",
        default=settings.events_table_name,
        help="Table name (defaults to EVENTS_TABLE_NAME).",
    )
    parser.add_argument(
        "--region",
        default=settings.dynamodb_region,
        help="AWS region (defaults to DYNAMODB_REGION).",
    )
    parser.add_argument(
        "--no-wait",
        action="store_true",
        help="Return without waiting for the table to become active.",
    )
    return parser


def main() -> int:
    ns = build_parser().parse_args()
    client = boto3.client("dynamodb", region_name=ns.region)

    try:
        client.create_table(
            TableName=ns.table_name,
            KeySchema=[
                {"AttributeName": SUBJECT_KEY_ATTR, "KeyType": "HASH"},
                {"AttributeName": TIMESTAMP_ATTR, "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": SUBJECT_KEY_ATTR, "AttributeType": "S"},
                {"AttributeName": TIMESTAMP_ATTR, "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as exc:
        if exc.response.get("Error", {}).get("Code") == "ResourceInUseException":
            print(f"Table {ns.table_name} already exists in {ns.region}")
            return 0
        raise

    if not ns.no_wait:
        client.get_waiter("table_exists").wait(TableName=ns.table_name)
    print(f"OK: created {ns.table_name} in {ns.region}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
