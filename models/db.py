from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

db = SQLAlchemy()


def use_immediate_transactions(engine):
    """
    SQLite ignores SELECT ... FOR UPDATE and pysqlite defers BEGIN until the
    first write, so two requests could both read before either writes.
    Starting every transaction with BEGIN IMMEDIATE takes the database write
    lock up front; the second request waits for the first to commit.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
