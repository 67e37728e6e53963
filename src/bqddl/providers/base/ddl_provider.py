"""
Base DDL Provider Interface

Defines the contract for turning normalized spec records into DDL statements.
"""

from abc import ABC, abstractmethod
from typing import Any

from bqddl.config import GeneratorConfig

from .formatting import comment_if_deactivated, get_full_name, indent


class DDLProvider(ABC):
    """Base DDL provider interface"""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    # ====================
    # GENERIC UTILITIES
    # ====================

    def full_name(self, *segments: str | None) -> str:
        """
        Build the fully-qualified name of an object.

        Example:
            >>> self.full_name("proj", "sales", "orders")
            'proj.sales.orders'
        """
        name = get_full_name(*segments)
        if self.config.quote_identifiers and name:
            return self.quote_identifier(name)
        return name

    def tab(self, text: str) -> str:
        """Indent a fragment with the configured indentation"""
        return indent(text, self.config.indent)

    @staticmethod
    def comment(text: str, is_activated: bool, inline: bool = False) -> str:
        return comment_if_deactivated(text, is_activated, inline)

    @staticmethod
    def quote_identifier(identifier: str) -> str:
        """Helper to quote SQL identifiers"""
        return f"`{identifier.replace('`', '')}`"

    # ====================
    # ABSTRACT METHODS - Providers must implement
    # ====================

    @abstractmethod
    def create_database(self, database: Any) -> str:
        """Generate CREATE statement for a database"""

    @abstractmethod
    def alter_database(self, database: Any) -> str:
        """Generate ALTER statement for database options"""

    @abstractmethod
    def drop_database(self, database_name: str, project_id: str | None = None) -> str:
        """Generate DROP statement for a database"""

    @abstractmethod
    def create_table(self, table: Any) -> str:
        """Generate CREATE statement for a table"""

    @abstractmethod
    def alter_table_options(self, table: Any) -> str:
        """Generate ALTER statement for table options"""

    @abstractmethod
    def drop_table(self, table_name: str, db_data: Any = None) -> str:
        """Generate DROP statement for a table"""

    @abstractmethod
    def add_column(self, table_name: str, column: Any, db_data: Any = None) -> str:
        """Generate ALTER TABLE ... ADD COLUMN"""

    @abstractmethod
    def drop_column(self, table_name: str, column_name: str, db_data: Any = None) -> str:
        """Generate ALTER TABLE ... DROP COLUMN"""

    @abstractmethod
    def alter_column_type(self, table_name: str, column: Any, db_data: Any = None) -> str:
        """Generate ALTER COLUMN ... SET DATA TYPE"""

    @abstractmethod
    def alter_column_drop_not_null(
        self, table_name: str, column_name: str, db_data: Any = None
    ) -> str:
        """Generate ALTER COLUMN ... DROP NOT NULL"""

    @abstractmethod
    def alter_column_options(
        self,
        table_name: str,
        column_name: str,
        description: str | None,
        db_data: Any = None,
    ) -> str:
        """Generate ALTER COLUMN ... SET OPTIONS"""

    @abstractmethod
    def create_view(self, view: Any) -> str:
        """Generate CREATE statement for a view"""

    @abstractmethod
    def alter_view(self, view: Any) -> str:
        """Generate ALTER statement for view options"""

    @abstractmethod
    def drop_view(self, view_name: str, db_data: Any = None, materialized: bool = False) -> str:
        """Generate DROP statement for a view"""
