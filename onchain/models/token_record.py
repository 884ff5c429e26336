from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from onchain.models.token_type import ERC20Type, ERC721Type, ERC1155Type


class _BaseTokenData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ERC20TokenData(_BaseTokenData):
    name: str = ""
    symbol: str = ""
    decimals: int = Field(ge=0, le=255)
    # uint256
    total_supply: int = Field(ge=0, alias="totalSupply")
    type: ERC20Type = Field(default_factory=ERC20Type)

    @field_serializer("total_supply", when_used="json")
    def serialize_total_supply(self, total_supply: int) -> str:
        # uint256 does not fit in a JSON number for most consumers
        return str(total_supply)


class ERC721TokenData(_BaseTokenData):
    owner: str
    token_uri: Optional[str] = Field(default=None, alias="tokenURI")
    token_metadata: Optional[Any] = Field(default=None, alias="tokenMetadata")
    contract_metadata: Optional[Any] = Field(default=None, alias="contractMetadata")
    type: ERC721Type


class ERC1155TokenData(_BaseTokenData):
    # Raw template as returned by uri(id), {id} not substituted
    uri: Optional[str] = None
    token_metadata: Optional[Any] = Field(default=None, alias="tokenMetadata")
    type: ERC1155Type


TokenRecord = Union[ERC20TokenData, ERC721TokenData, ERC1155TokenData]
