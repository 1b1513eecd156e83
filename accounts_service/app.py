"""Wiring of stores, clients and publishers into the services."""

from dataclasses import dataclass

import httpx

from accounts_service.clients import build_cards_client, build_loans_client
from accounts_service.config import ServiceConfig
from accounts_service.events import ConsolePublisher, EventPublisher, KafkaPublisher
from accounts_service.generators import RandomAccountNumberGenerator
from accounts_service.services import AccountsService, CustomersService
from accounts_service.store import InMemoryRecordStore, RecordStore


@dataclass
class Application:
    """Services sharing one record store and one publisher."""

    config: ServiceConfig
    store: RecordStore
    publisher: EventPublisher
    accounts: AccountsService
    customers: CustomersService

    def close(self) -> None:
        """Release thread pools, HTTP clients and the producer."""
        self.customers.close()
        self.publisher.close()


def create_app(
    config: ServiceConfig | None = None,
    store: RecordStore | None = None,
    publisher: EventPublisher | None = None,
    transport: httpx.BaseTransport | None = None,
    console: bool = False,
) -> Application:
    """Build the application from configuration.

    Parameters
    ----------
    config : ServiceConfig | None
        Configuration (default: from environment variables).
    store : RecordStore | None
        Record store (default: a new in-memory store).
    publisher : EventPublisher | None
        Event publisher (default: Kafka, or console when ``console``).
    transport : httpx.BaseTransport | None
        HTTP transport for downstream clients, used by tests.
    console : bool
        Print events instead of sending them to Kafka.
    """
    config = config or ServiceConfig.from_env()
    store = store if store is not None else InMemoryRecordStore()
    if publisher is None:
        publisher = ConsolePublisher() if console else KafkaPublisher(config.kafka)

    accounts = AccountsService(
        store=store,
        publisher=publisher,
        account_number_generator=RandomAccountNumberGenerator(
            config.account_numbers, seed=config.seed
        ),
        topics=config.topics,
        branch_address=config.branch_address,
    )
    customers = CustomersService(
        store=store,
        loans_client=build_loans_client(config.downstream, transport=transport),
        cards_client=build_cards_client(config.downstream, transport=transport),
    )
    return Application(
        config=config,
        store=store,
        publisher=publisher,
        accounts=accounts,
        customers=customers,
    )
