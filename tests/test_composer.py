"""Unit tests for prompt composition and response clean-up."""

from __future__ import annotations

import pytest

from query_genie.llm import (
    RAILS_SYSTEM,
    SQL_SYSTEM,
    QueryStyle,
    build_model_names,
    clean_response,
    compose_messages,
    to_model_name,
)
from query_genie.llm.prompts import (
    MODEL_NAMES_HEADER,
    PROCESS_HEADER,
    SCHEMA_DEFINITION_HEADER,
    SCHEMA_DETAILS_HEADER,
    TABLE_NAMES_HEADER,
    USER_REQUEST_HEADER,
)
from query_genie.schema import extract

SCHEMA_TEXT = "CREATE TABLE users (\n  id INT PRIMARY KEY,\n  account_id INT REFERENCES accounts(id)\n);\nCREATE TABLE accounts (\n  id INT PRIMARY KEY\n);"


def _compose(style: QueryStyle, request: str = "list all organizations") -> list[dict[str, str]]:
    summary, table_names, _ = extract(SCHEMA_TEXT)
    return compose_messages(style, SCHEMA_TEXT, summary, table_names, request)


class TestModelNames:
    """Tests for table -> Rails model name derivation."""

    @pytest.mark.parametrize(
        "table, expected",
        [
            ("accounts", "Account"),
            ("users", "User"),
            ("address", "Address"),
            ("person", "Person"),
            ("line_items", "Line_item"),
            ("categories", "Categorie"),
        ],
    )
    def test_to_model_name(self, table, expected):
        assert to_model_name(table) == expected

    @pytest.mark.parametrize("table", ["accounts", "users", "address", "people"])
    def test_idempotent(self, table):
        """Re-deriving from a model name should not change it."""
        name = to_model_name(table)
        assert to_model_name(name) == name

    def test_empty_name(self):
        assert to_model_name("") == ""

    def test_build_model_names(self):
        assert build_model_names(["accounts", "users"]) == (
            "Account (from table: accounts), User (from table: users)"
        )


class TestComposeMessages:
    """Tests for compose_messages."""

    def test_two_messages_system_then_user(self):
        messages = _compose(QueryStyle.SQL)
        assert [m["role"] for m in messages] == ["system", "user"]

    def test_system_prompt_per_style(self):
        assert _compose(QueryStyle.SQL)[0]["content"] == SQL_SYSTEM
        assert _compose(QueryStyle.RAILS)[0]["content"] == RAILS_SYSTEM

    def test_accepts_style_value(self):
        assert compose_messages("rails", "", "", [], "x")[0]["content"] == RAILS_SYSTEM

    def test_system_prompts_state_the_procedure(self):
        for prompt in (SQL_SYSTEM, RAILS_SYSTEM):
            for step in range(1, 7):
                assert f"STEP {step})" in prompt
            assert "NEVER invent" in prompt
        assert "SELECT * FROM [exact_table_name]" in SQL_SYSTEM
        assert "ModelName.all" in RAILS_SYSTEM

    def test_sql_user_message_section_order(self):
        content = _compose(QueryStyle.SQL)[1]["content"]
        headers = [
            TABLE_NAMES_HEADER,
            SCHEMA_DETAILS_HEADER,
            SCHEMA_DEFINITION_HEADER,
            USER_REQUEST_HEADER,
            PROCESS_HEADER,
        ]
        positions = [content.index(h) for h in headers]
        assert positions == sorted(positions)
        assert MODEL_NAMES_HEADER not in content

    def test_rails_user_message_includes_model_names(self):
        content = _compose(QueryStyle.RAILS)[1]["content"]
        assert content.index(TABLE_NAMES_HEADER) < content.index(MODEL_NAMES_HEADER)
        assert content.index(MODEL_NAMES_HEADER) < content.index(SCHEMA_DETAILS_HEADER)
        assert (
            f"{MODEL_NAMES_HEADER}\nAccount (from table: accounts), User (from table: users)\n"
            in content
        )

    def test_user_message_embeds_inputs(self):
        summary, _, _ = extract(SCHEMA_TEXT)
        content = _compose(QueryStyle.SQL, request="count users per account")[1]["content"]
        assert content.startswith(f"{TABLE_NAMES_HEADER}\naccounts, users\n\n")
        assert f"{SCHEMA_DETAILS_HEADER}\n{summary}\n\n" in content
        assert f"{SCHEMA_DEFINITION_HEADER}\n{SCHEMA_TEXT}\n\n" in content
        assert f"{USER_REQUEST_HEADER}\ncount users per account\n\n" in content

    def test_numbered_process(self):
        sql = _compose(QueryStyle.SQL)[1]["content"]
        rails = _compose(QueryStyle.RAILS)[1]["content"]
        assert "\n6. OUTPUT: Generate only the SQL query, nothing else." in sql
        assert "\n2. MODEL NAME CONVERSION:" in rails
        assert rails.endswith("7. OUTPUT: Generate only the Rails Active Record query, nothing else.")


class TestCleanResponse:
    """Tests for clean_response."""

    def test_sql_fence(self):
        assert clean_response("```sql\nSELECT * FROM accounts;\n```") == "SELECT * FROM accounts;"

    def test_ruby_fence(self):
        assert clean_response("```ruby\nAccount.all\n```", QueryStyle.RAILS) == "Account.all"

    def test_bare_fence(self):
        assert clean_response("```\nAccount.all\n```", QueryStyle.RAILS) == "Account.all"

    def test_single_backticks(self):
        assert clean_response("`Account.all`", "rails") == "Account.all"

    def test_surrounding_whitespace(self):
        assert clean_response("  \nSELECT 1;\n  ") == "SELECT 1;"

    def test_interior_untouched(self):
        body = "SELECT a,\n       b\n  FROM t\n WHERE note = '`x`'   AND  c = 1;"
        assert clean_response(f"```sql\n{body}\n```") == body

    def test_fenced_body_keeps_quoted_identifier(self):
        body = "SELECT * FROM `accounts`"
        assert clean_response(f"```sql\n{body}\n```") == body
        assert clean_response(f"```\n`{body}`\n```") == f"`{body}`"

    def test_backtick_before_final_newline_kept(self):
        assert clean_response("SELECT `a`\n") == "SELECT `a`"

    def test_fence_followed_by_newline(self):
        assert clean_response("```sql\nSELECT 1;\n```\n") == "SELECT 1;"

    @pytest.mark.parametrize("text", ["", None])
    def test_empty(self, text):
        assert clean_response(text) == ""
