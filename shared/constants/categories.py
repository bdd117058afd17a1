class Categories:
    """Centralised number category definitions"""

    PRIMES = "primes"
    FIBONACCI = "fibo"
    EVEN = "even"
    RANDOM = "rand"

    # Single-character path tokens accepted by the HTTP surface
    TOKENS = {
        "p": PRIMES,
        "f": FIBONACCI,
        "e": EVEN,
        "r": RANDOM,
    }

    @classmethod
    def valid_tokens(cls) -> list[str]:
        return list(cls.TOKENS)

    @classmethod
    def from_token(cls, token: str) -> str:
        """Map a path token to its upstream category name."""
        category = cls.TOKENS.get(token)
        if not category:
            raise ValueError(f"Unknown number ID: {token}")
        return category
