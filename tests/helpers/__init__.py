from .factories import mk_identity, mk_nested_vault_json, mk_seeded_rng, mk_signing_key, mk_vault

__all__ = [
    "mk_identity",
    "mk_nested_vault_json",
    "mk_seeded_rng",
    "mk_signing_key",
    "mk_vault",
]
