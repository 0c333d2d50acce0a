from sqlalchemy.dialects import mysql, sqlite
from sqlalchemy.schema import CreateTable

from string_analyzer.errors import ConflictingFiltersError, ValidationError
from string_analyzer.models.string_record import StringRecord


def ddl_for(dialect):
    return str(CreateTable(StringRecord.__table__).compile(dialect=dialect))


def test_mysql_created_at_keeps_microseconds():
    assert "created_at DATETIME(6) NOT NULL" in ddl_for(mysql.dialect())


def test_sqlite_created_at_is_plain_datetime():
    assert "created_at DATETIME NOT NULL" in ddl_for(sqlite.dialect())


def test_conflicting_filters_status():
    error = ConflictingFiltersError("Query parsed but resulted in conflicting filters")
    assert isinstance(error, ValidationError)
    assert error.status_code == 422
