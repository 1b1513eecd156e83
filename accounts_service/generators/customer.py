"""Demo customer generator."""

from __future__ import annotations

from typing import Iterator

from accounts_service.generators.base import BaseGenerator
from accounts_service.models import CustomerDto
from accounts_service.validation import NAME_MAX_LENGTH, NAME_MIN_LENGTH


class CustomerGenerator(BaseGenerator):
    """Generate valid ``CustomerDto`` payloads for seeding and demos.

    Mobile numbers are 10 digits starting with 6-9 and are unique within
    one generator instance.
    """

    def __init__(self, seed: int | None = None, locale: str = "en_IN") -> None:
        super().__init__(seed, locale=locale)
        self._used_mobile_numbers: set[str] = set()

    def generate(self) -> CustomerDto:
        """Generate a single customer.

        Returns
        -------
        CustomerDto
            Generated customer payload without an account section.
        """
        return CustomerDto(
            name=self._generate_name(),
            email=self.fake.email(),
            mobile_number=self._generate_mobile_number(),
        )

    def generate_batch(self, count: int) -> Iterator[CustomerDto]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        CustomerDto
            Generated customers.
        """
        for _ in range(count):
            yield self.generate()

    def _generate_name(self) -> str:
        name = self.fake.name()
        while len(name) < NAME_MIN_LENGTH:
            name = f"{name} {self.fake.last_name()}"
        return name[:NAME_MAX_LENGTH].strip()

    def _generate_mobile_number(self) -> str:
        while True:
            number = f"{self.random.randint(6, 9)}{self.random.randint(0, 999_999_999):09d}"
            if number not in self._used_mobile_numbers:
                self._used_mobile_numbers.add(number)
                return number
