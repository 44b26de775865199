import pytest

from urlsigner_core import UrlSigner
from urlsigner_core.signature import SignatureCodec

SECRET = "S3CRET"
NOW = 1_700_000_000


class FrozenClock:
    """Clock that only moves when told to."""
    
    def __init__(self, now: float = NOW):
        self.now = now
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def codec():
    return SignatureCodec(SECRET)


@pytest.fixture
def signer(clock):
    return UrlSigner(SECRET, clock=clock)
