from keyshortener.dao.sql.key_store_sql_dao import KeyStoreSQLDAO, create_key_store_engine, short_urls_table


__all__ = [
    'KeyStoreSQLDAO',
    'create_key_store_engine',
    'short_urls_table',
]
