import pytest

from fakes import FakeChain, make_fake_web3


@pytest.fixture
def fake_web3():
    def factory(responses=None, bytes32_responses=None):
        chain = FakeChain(responses, bytes32_responses)
        return make_fake_web3(chain), chain

    return factory
