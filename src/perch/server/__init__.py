"""Server side of dispatch — return-value negotiation, fault translation, ASGI."""
