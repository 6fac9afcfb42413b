from pydantic import BaseModel, ConfigDict


class ValidatorTotals(BaseModel):
    """Bonded totals of one validator, taken from the exported snapshot."""
    model_config = ConfigDict(frozen=True)

    id: str               # Operator address (onomyvaloper...)
    total_shares: int     # delegator_shares, fractional part dropped
    total_tokens: int     # tokens, fractional part dropped


class Delegation(BaseModel):
    """Represents a delegation from a user to a validator."""
    model_config = ConfigDict(frozen=True)

    delegator: str        # Delegator's address (onomy...)
    validator: str        # Validator operator address
    shares: int           # Shares, fractional part dropped
