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


from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from eth_utils import to_bytes, to_checksum_address

from abi.erc165_abi import ERC165_ABI
from abi.erc20_abi import ERC20_ABI, ERC20_ABI_BYTES32
from abi.erc721_abi import ERC721_ABI
from abi.erc1155_abi import ERC1155_ABI
from constants.constants import MAX_ERC20_DECIMALS
from constants.contract_interface_id import (
    ERC721_ENUMERABLE_ID,
    ERC721_ID,
    ERC721_METADATA_ID,
    ERC1155_ID,
    ERC1155_METADATA_URI_ID,
)
from onchain.exceptions import RequiredFieldFetchError, UnsupportedTokenType
from onchain.models.token_record import ERC20TokenData
from onchain.models.token_type import ERC721Type, ERC1155Type, TokenSubType, TokenTypeDescriptor
from onchain.service.contract_call_service import ContractCallService
from utils.async_utils import gather_all
from utils.logger_utils import get_logger

logger = get_logger("Standard Detector Service")

# (interface id, sub type) in the order sub types are reported
ERC721_SUB_TYPE_INTERFACES = (
    (ERC721_METADATA_ID, TokenSubType.IERC721_METADATA),
    (ERC721_ENUMERABLE_ID, TokenSubType.IERC721_ENUMERABLE),
)
ERC1155_SUB_TYPE_INTERFACES = ((ERC1155_METADATA_URI_ID, TokenSubType.IERC1155_METADATA_URI),)


@dataclass(frozen=True)
class Detection:
    address: str
    type: TokenTypeDescriptor
    # Only set for ERC20, whose fields are read while detecting
    erc20_data: Optional[ERC20TokenData] = None


class StandardDetectorService(object):
    """
    Works out which token standard a contract implements without knowing its ABI.

    ERC165 declarations are authoritative: ERC721 is checked first, then ERC1155, and only
    contracts declaring neither are tried as ERC20 by reading decimals and totalSupply.
    """

    def __init__(self, web3):
        self._web3 = web3
        self._calls = ContractCallService(web3)

    async def detect(self, address: str) -> TokenTypeDescriptor:
        detection = await self.detect_token(address)
        return detection.type

    async def detect_token(self, address: str) -> Detection:
        checksum_address = to_checksum_address(address)
        erc165_contract = self._calls.get_contract(checksum_address, ERC165_ABI)

        # 1. ERC721
        if await self._supports_interface(erc165_contract, ERC721_ID):
            sub_types = await self._read_sub_types(erc165_contract, ERC721_SUB_TYPE_INTERFACES)
            logger.debug(f"{checksum_address} is ERC721 with sub types {sub_types}")
            return Detection(checksum_address, ERC721Type(sub_types=sub_types))

        # 2. ERC1155
        if await self._supports_interface(erc165_contract, ERC1155_ID):
            sub_types = await self._read_sub_types(erc165_contract, ERC1155_SUB_TYPE_INTERFACES)
            logger.debug(f"{checksum_address} is ERC1155 with sub types {sub_types}")
            return Detection(checksum_address, ERC1155Type(sub_types=sub_types))

        # 3. ERC20 has no ERC165 id, fall back to reading its fields
        erc20_data = await self.read_erc20(checksum_address)
        if erc20_data is not None:
            logger.debug(f"{checksum_address} is ERC20 ({erc20_data.symbol})")
            return Detection(checksum_address, erc20_data.type, erc20_data)

        logger.debug(f"{checksum_address} matches no supported token standard")
        raise UnsupportedTokenType(checksum_address)

    async def read_erc20(self, address: str) -> Optional[ERC20TokenData]:
        """
        Reads name, symbol, decimals and totalSupply concurrently.

        decimals and totalSupply are jointly required; name and symbol are optional in
        ERC20 and degrade to empty strings.
        """
        contract = self._calls.get_contract(address, ERC20_ABI)
        contract_bytes32 = self._calls.get_contract(address, ERC20_ABI_BYTES32)

        name, symbol, decimals, total_supply = await gather_all(
            self._read_text(contract.functions.name(), contract_bytes32.functions.name()),
            self._read_text(contract.functions.symbol(), contract_bytes32.functions.symbol()),
            self._calls.call_optional(contract.functions.decimals()),
            self._calls.call_optional(contract.functions.totalSupply()),
        )

        if not _is_uint(decimals, upper=MAX_ERC20_DECIMALS) or not _is_uint(total_supply):
            return None

        return ERC20TokenData(name=name, symbol=symbol, decimals=decimals, total_supply=total_supply)

    async def read_erc721(
        self, address: str, token_id: Optional[int], token_type: ERC721Type
    ) -> Tuple[str, Optional[str]]:
        """Returns (owner, tokenURI). tokenURI is only read when IERC721Metadata is declared."""
        if token_id is None:
            raise RequiredFieldFetchError("owner", address, "A token id is required to read ERC721 token data")

        contract = self._calls.get_contract(address, ERC721_ABI)
        owner_call = self._calls.call_required(contract.functions.ownerOf(token_id), "owner", address)
        if token_type.has(TokenSubType.IERC721_METADATA):
            token_uri_call = self._calls.call_optional(contract.functions.tokenURI(token_id))
        else:
            token_uri_call = _absent()

        owner, token_uri = await gather_all(owner_call, token_uri_call)
        return owner, token_uri or None

    async def read_erc1155_uri(self, address: str, token_id: Optional[int]) -> Optional[str]:
        if token_id is None:
            raise RequiredFieldFetchError("uri", address, "A token id is required to read ERC1155 token data")

        contract = self._calls.get_contract(address, ERC1155_ABI)
        uri = await self._calls.call_optional(contract.functions.uri(token_id))
        return uri or None

    async def read_contract_uri(self, address: str) -> Optional[str]:
        contract = self._calls.get_contract(address, ERC721_ABI)
        contract_uri = await self._calls.call_optional(contract.functions.contractURI())
        return contract_uri or None

    async def _supports_interface(self, contract, interface_id: str) -> bool:
        result = await self._calls.call_optional(
            contract.functions.supportsInterface(to_bytes(hexstr=interface_id))
        )
        return result is True

    async def _read_sub_types(self, contract, interfaces: Sequence) -> Tuple[TokenSubType, ...]:
        results = await gather_all(
            *(self._supports_interface(contract, interface_id) for interface_id, _ in interfaces)
        )
        return tuple(sub_type for (_, sub_type), supported in zip(interfaces, results) if supported)

    async def _read_text(self, func, bytes32_func) -> str:
        value = await self._calls.call_optional(func)
        if value is None:
            value = await self._calls.call_optional(bytes32_func)
        if isinstance(value, bytes):
            value = _bytes_to_string(value)
        return value if isinstance(value, str) else ""


def _is_uint(value: Union[int, None], upper: Optional[int] = None) -> bool:
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return value >= 0 and (upper is None or value <= upper)


def _bytes_to_string(b: bytes) -> str:
    try:
        return b.rstrip(b"\x00").decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("A UnicodeDecodeError exception occurred while trying to decode bytes to string", exc_info=True)
        return ""


async def _absent():
    return None
