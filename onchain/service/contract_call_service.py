# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.


import asyncio

import aiohttp
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3Exception

from onchain.exceptions import RequiredFieldFetchError
from utils.logger_utils import get_logger

logger = get_logger("Contract Call Service")

# BadFunctionCallOutput happens if the contract doesn't implement the function or was self-destructed.
# ContractLogicError is a revert. OverflowError/ValueError happen if the return data doesn't match the ABI.
CAPABILITY_ABSENT_ERRORS = (
    BadFunctionCallOutput,
    ContractLogicError,
    Web3Exception,
    OverflowError,
    ValueError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
)


class ContractCallService(object):
    def __init__(self, web3):
        self._web3 = web3

    def get_contract(self, address, abi):
        return self._web3.eth.contract(address=address, abi=abi)

    async def call_optional(self, func, default_value=None):
        """Calls an optional function; a revert or RPC error means the capability is absent."""
        return await call_contract_function(
            func=func,
            ignore_errors=CAPABILITY_ABSENT_ERRORS,
            default_value=default_value,
        )

    async def call_required(self, func, field, address):
        """Calls a function whose result is needed for a field of an already detected token type."""
        try:
            return await func.call()
        except Exception as e:
            logger.debug(f"Required call {field} failed for {address}: {e}")
            raise RequiredFieldFetchError(field, address) from e


async def call_contract_function(func, ignore_errors, default_value=None):
    try:
        result = await func.call()
        return result
    except Exception as ex:
        if isinstance(ex, ignore_errors):
            logger.debug(
                "An exception occurred in function {} of contract {}. ".format(func.fn_name, func.address)
                + "This exception can be safely ignored.",
                exc_info=True,
            )
            return default_value
        else:
            raise ex
