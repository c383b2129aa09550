from keyshortener.dao.base.key_store_base_dao import KeyStoreBaseDAO


__all__ = ['KeyStoreBaseDAO']
