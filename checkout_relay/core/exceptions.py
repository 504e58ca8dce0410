# checkout_relay/core/exceptions.py


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is absent."""


class InvalidOrderError(ValueError):
    pass


class CheckoutSessionError(RuntimeError):
    pass


class WebhookSecretMissingError(RuntimeError):
    pass


class WebhookVerificationError(ValueError):
    pass
