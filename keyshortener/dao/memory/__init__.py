from keyshortener.dao.memory.key_store_memory_dao import KeyStoreMemoryDAO


__all__ = ['KeyStoreMemoryDAO']
