"""Tests for data generators."""

import pytest

from accounts_service.config import AccountNumberConfig
from accounts_service.exceptions import ConfigurationError
from accounts_service.generators import (
    CustomerGenerator,
    RandomAccountNumberGenerator,
    SequentialAccountNumberGenerator,
)
from accounts_service.validation import validate_customer


class TestRandomAccountNumberGenerator:
    """Tests for RandomAccountNumberGenerator."""

    def test_numbers_in_range(self, seed: int) -> None:
        """Test every number is within [1000000000, 1899999999]."""
        gen = RandomAccountNumberGenerator(seed=seed)

        for _ in range(1000):
            assert 1_000_000_000 <= gen.next_number() <= 1_899_999_999

    def test_reproducible(self, seed: int) -> None:
        """Test same seed produces the same sequence."""
        first = RandomAccountNumberGenerator(seed=seed)
        second = RandomAccountNumberGenerator(seed=seed)

        assert [first.next_number() for _ in range(5)] == [second.next_number() for _ in range(5)]

    def test_custom_range(self, seed: int) -> None:
        """Test a narrow configured range."""
        gen = RandomAccountNumberGenerator(AccountNumberConfig(offset=2_000_000_000, span=3), seed=seed)

        assert {gen.next_number() for _ in range(50)} <= {2_000_000_000, 2_000_000_001, 2_000_000_002}


class TestSequentialAccountNumberGenerator:
    """Tests for SequentialAccountNumberGenerator."""

    def test_sequence(self) -> None:
        """Test numbers start at the offset and increase by one."""
        gen = SequentialAccountNumberGenerator()

        assert [gen.next_number() for _ in range(3)] == [1_000_000_000, 1_000_000_001, 1_000_000_002]

    def test_start(self) -> None:
        """Test a custom starting position."""
        assert SequentialAccountNumberGenerator(start=5).next_number() == 1_000_000_005

    def test_start_outside_range(self) -> None:
        """Test a start beyond the span is rejected."""
        with pytest.raises(ConfigurationError):
            SequentialAccountNumberGenerator(AccountNumberConfig(span=10), start=10)

    def test_exhaustion(self) -> None:
        """Test running past the span raises."""
        gen = SequentialAccountNumberGenerator(AccountNumberConfig(span=2))
        gen.next_number()
        gen.next_number()

        with pytest.raises(ConfigurationError):
            gen.next_number()


class TestCustomerGenerator:
    """Tests for CustomerGenerator."""

    def test_generate_customer(self, seed: int) -> None:
        """Test generated customers pass validation."""
        gen = CustomerGenerator(seed=seed)

        for customer in gen.generate_batch(50):
            validate_customer(customer)
            assert customer.mobile_number[0] in "6789"
            assert customer.account is None

    def test_unique_mobile_numbers(self, seed: int) -> None:
        """Test mobile numbers do not repeat within one generator."""
        gen = CustomerGenerator(seed=seed)
        numbers = [c.mobile_number for c in gen.generate_batch(200)]

        assert len(set(numbers)) == 200

    def test_reproducibility(self, seed: int) -> None:
        """Test same seed produces same customers."""
        first = list(CustomerGenerator(seed=seed).generate_batch(5))
        second = list(CustomerGenerator(seed=seed).generate_batch(5))

        assert first == second
