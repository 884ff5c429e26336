from enum import Enum
from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class TokenStandard(str, Enum):
    ERC20 = "ERC20"         # Fungible
    ERC721 = "ERC721"       # NFT
    ERC1155 = "ERC1155"     # Multi token


class TokenSubType(str, Enum):
    IERC721_METADATA = "IERC721Metadata"
    IERC721_ENUMERABLE = "IERC721Enumerable"
    IERC1155_METADATA_URI = "IERC1155Metadata_URI"


class _BaseTokenType(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, use_enum_values=True)


class ERC20Type(_BaseTokenType):
    type: Literal["ERC20"] = TokenStandard.ERC20.value


class ERC721Type(_BaseTokenType):
    type: Literal["ERC721"] = TokenStandard.ERC721.value
    # Fixed interface order, not completion order
    sub_types: Tuple[TokenSubType, ...] = Field(default=(), alias="subTypes")

    def has(self, sub_type: TokenSubType) -> bool:
        return TokenSubType(sub_type).value in self.sub_types


class ERC1155Type(_BaseTokenType):
    type: Literal["ERC1155"] = TokenStandard.ERC1155.value
    sub_types: Tuple[TokenSubType, ...] = Field(default=(), alias="subTypes")

    def has(self, sub_type: TokenSubType) -> bool:
        return TokenSubType(sub_type).value in self.sub_types


TokenTypeDescriptor = Annotated[Union[ERC20Type, ERC721Type, ERC1155Type], Field(discriminator="type")]
