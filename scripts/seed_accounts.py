#!/usr/bin/env python3
"""Create demo accounts through the accounts service.

Generates customers with Faker and registers each one via
``AccountsService.create_account``. Creation events go to Kafka, or to
stdout with ``--console``.

Usage:
    python scripts/seed_accounts.py --customers 20 --console
    python scripts/seed_accounts.py --customers 500 --kafka-bootstrap kafka:9092
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from accounts_service.app import create_app
from accounts_service.config import ServiceConfig
from accounts_service.exceptions import CustomerAlreadyExistsError
from accounts_service.generators import CustomerGenerator
from accounts_service.logging import setup_logging

logger = logging.getLogger(__name__)


def seed(app, num_customers: int, seed_value: int) -> dict[str, int]:
    """Create ``num_customers`` demo accounts.

    Returns
    -------
    dict[str, int]
        Counts of created and duplicate customers.
    """
    generator = CustomerGenerator(seed=seed_value)
    created = 0
    duplicates = 0
    for customer in generator.generate_batch(num_customers):
        try:
            app.accounts.create_account(customer)
            created += 1
        except CustomerAlreadyExistsError as e:
            logger.debug("Skipping duplicate: %s", e)
            duplicates += 1
    return {"created": created, "duplicates": duplicates}


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create demo customer accounts")
    parser.add_argument(
        "--customers",
        type=int,
        default=10,
        help="Number of customers to create (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Kafka bootstrap servers (default: KAFKA_BOOTSTRAP_SERVERS or localhost:9092)",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Print events to stdout instead of sending them to Kafka",
    )
    args = parser.parse_args()

    config = ServiceConfig.from_env()
    config.seed = args.seed
    if args.kafka_bootstrap:
        config.kafka.bootstrap_servers = args.kafka_bootstrap
    setup_logging(config.log_level, config.log_format)

    app = create_app(config, console=args.console)
    start = time.perf_counter()
    try:
        counts = seed(app, args.customers, args.seed)
    finally:
        app.close()
    elapsed = time.perf_counter() - start

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for name, count in {**counts, **app.store.summary()}.items():
        print(f"{name + ':':18}{count}")
    print(f"{'elapsed:':18}{elapsed:.2f}s")
    print("=" * 60)


if __name__ == "__main__":
    main()
