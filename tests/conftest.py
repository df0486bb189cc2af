"""
Pytest configuration and shared fixtures for Hireboard tests.
"""

import sqlite3
import os
import sys
from datetime import datetime

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hireboard.database import create_tables

FIXED_NOW = datetime(2024, 3, 10, 14, 30, 0)


@pytest.fixture
def fixed_now():
    """A fixed reference instant: Sunday 10 March 2024, 14:30."""
    return FIXED_NOW


@pytest.fixture
def fixed_clock(fixed_now):
    """Clock callable that always returns fixed_now."""
    return lambda: fixed_now


@pytest.fixture
def temp_db():
    """
    Create a temporary in-memory SQLite database with the full schema.

    Yields:
        sqlite3.Connection: Database connection
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    create_tables(conn)

    yield conn
    conn.close()


@pytest.fixture
def db_path(tmp_path):
    """Path to an initialized on-disk database (for code that opens its own connections)."""
    from hireboard.database import init_db

    path = tmp_path / "hireboard_test.db"
    init_db(path)
    return path


@pytest.fixture
def app(tmp_path, fixed_clock):
    """Flask app on a temporary database with the scheduler disabled."""
    from hireboard import create_app

    app = create_app(
        overrides={
            "database": {"path": str(tmp_path / "app_test.db")},
            "scheduler": {"enabled": False},
        },
        clock=fixed_clock,
    )
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_message():
    """
    Sample group-chat message with tasks and dates.

    Returns:
        str: Message text
    """
    return (
        "Hi everyone!\n"
        "Submit the DBMS assignment by 25/12/2024\n"
        "\n"
        "Important: attend the placement seminar tomorrow\n"
        "Prepare slides for the team\n"
        "Have a good weekend"
    )


@pytest.fixture
def strong_resume_text():
    """
    Resume text that satisfies every scoring rule.

    Six sections, more than ten keywords, all four contact channels,
    exactly 500 words, no special characters, many action verbs and
    quantified results.

    Returns:
        str: Resume content
    """
    base = """
    John Doe
    john.doe@example.com  +1 555-123-4567
    linkedin.com/in/johndoe  github.com/johndoe

    Summary
    Backend engineer with 6 years of experience building cloud services.

    Experience
    Senior Engineer at Acme
    Developed REST API services in Python and Java.
    Led a team of engineers and managed quarterly releases.
    Built CI/CD pipelines with Docker and Kubernetes on AWS.
    Designed SQL data models and improved query speed by 40% across services.
    Implemented testing practices that reduced incidents by 30% in one year.
    Increased deployment frequency to 20+ releases per month.

    Education
    BS Computer Science

    Skills
    Python, Java, JavaScript, React, Node, SQL, AWS, Docker, Kubernetes, Git, Agile

    Projects
    Open source analytics dashboard

    Certifications
    AWS Certified Developer
    """
    padding = ["reliable"] * (500 - len(base.split()))
    return base + "\n" + " ".join(padding)


@pytest.fixture
def weak_resume_text():
    """Ten words with nothing the scorer rewards."""
    return "I am a person who likes to work hard daily"
