from keyshortener.services.short_key_service import ShortKeyService


__all__ = ['ShortKeyService']
