"""
Registration configuration

RegistrationConfig carries everything that used to be process-wide state
(network selection, bridge contract location, prompt defaults). It is built
once by the caller and passed into the orchestrator, so independent runs can
use independent configurations side by side.

SupplierSettings reads the SUPPLIER_* keys from a mapping the caller hands
over (for example a copy of os.environ); the process environment itself is
never consulted.
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Literal, Mapping

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from supplier_registration.core.domain.registration import AnchorMode, PostConditionMode
from supplier_registration.core.domain.units import FEE_RATE_MAX_BPS


# Networks the bridge is deployed on
VALID_NETWORKS: FrozenSet[str] = frozenset({"mainnet", "testnet", "mocknet"})

# Public function registering a supplier
REGISTER_SUPPLIER_FUNCTION: str = "register-supplier"

# Mapping keys read by RegistrationConfig.from_mapping
ENV_PREFIX = "SUPPLIER_"
ENV_NETWORK = f"{ENV_PREFIX}NETWORK"
ENV_CONTRACT_ADDRESS = f"{ENV_PREFIX}CONTRACT_ADDRESS"
ENV_CONTRACT_NAME = f"{ENV_PREFIX}CONTRACT_NAME"


@dataclass(frozen=True)
class PromptDefaults:
    """Answers offered to the operator for the fee prompts."""

    fee_rate_bps: int
    base_fee_sats: int


@dataclass(frozen=True)
class RegistrationConfig:
    """Configuration of one registration run.

    - network: Stacks network the transaction is signed for
    - contract_address / contract_name: bridge contract
    - default_fee_rate_bps / default_base_fee_sats: prompt defaults offered
      to the operator (10 bps, 500 sats)
    """

    contract_address: str
    network: str = "mainnet"
    contract_name: str = "bridge"
    function_name: str = REGISTER_SUPPLIER_FUNCTION
    anchor_mode: AnchorMode = AnchorMode.ANY
    post_condition_mode: PostConditionMode = PostConditionMode.ALLOW
    default_fee_rate_bps: int = 10
    default_base_fee_sats: int = 500

    def __post_init__(self):
        if self.network not in VALID_NETWORKS:
            raise ValueError(
                f"network must be one of {sorted(VALID_NETWORKS)}, got {self.network!r}"
            )
        if not self.contract_address:
            raise ValueError("contract_address is required")
        if not self.contract_name:
            raise ValueError("contract_name is required")
        if not 0 <= self.default_fee_rate_bps <= FEE_RATE_MAX_BPS:
            raise ValueError(
                f"default_fee_rate_bps must be in [0, {FEE_RATE_MAX_BPS}], "
                f"got {self.default_fee_rate_bps}"
            )
        if self.default_base_fee_sats < 0:
            raise ValueError(
                f"default_base_fee_sats must be >= 0, got {self.default_base_fee_sats}"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "RegistrationConfig":
        """Build a config from an explicit mapping (e.g. a copy of os.environ).

        Raises:
            ValueError: Missing contract address or unknown network
                (pydantic.ValidationError is a ValueError)
        """
        settings = SupplierSettings.from_mapping(values)
        return cls(
            contract_address=settings.contract_address,
            network=settings.network,
            contract_name=settings.contract_name,
        )

    @property
    def contract_id(self) -> str:
        return f"{self.contract_address}.{self.contract_name}"

    @property
    def prompt_defaults(self) -> PromptDefaults:
        return PromptDefaults(
            fee_rate_bps=self.default_fee_rate_bps,
            base_fee_sats=self.default_base_fee_sats,
        )


class SupplierSettings(BaseSettings):
    """SUPPLIER_* settings, validated from an explicit mapping only."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    network: Literal["mainnet", "testnet", "mocknet"] = Field(
        default="mainnet", validation_alias=ENV_NETWORK, description="Stacks network"
    )
    contract_address: str = Field(
        ..., min_length=1, validation_alias=ENV_CONTRACT_ADDRESS, description="Bridge deployer"
    )
    contract_name: str = Field(
        default="bridge", min_length=1, validation_alias=ENV_CONTRACT_NAME, description="Bridge contract"
    )

    @field_validator("network", mode="before")
    @classmethod
    def normalize_network(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        # Init arguments only: no environment, .env or secrets lookup
        return (init_settings,)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "SupplierSettings":
        return cls(**dict(values))
