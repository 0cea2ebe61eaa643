import pytest


def _slow_is_prime(n: int) -> bool:
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


@pytest.fixture
def slow_is_prime():
    """Reference primality by plain trial division."""
    return _slow_is_prime
