"""
Pytest configuration and fixtures for the Shajara GEDCOM project
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from shajara import create_app


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_gedcom_data():
    """Single-person GEDCOM document"""
    return """0 HEAD
1 SOUR Family Tree Maker
1 GEDC
2 VERS 5.5
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME Ahmad /Haddad/
2 GIVN Ahmad
2 SURN Haddad
1 SEX M
1 BIRT
2 DATE 15 MAR 1950
2 PLAC Damascus
1 DEAT
2 DATE 31 DEC 2010
2 PLAC Beirut
0 TRLR"""


@pytest.fixture
def family_gedcom_data():
    """Two parents with one child, linked through a FAM record"""
    return """0 HEAD
1 SOUR TEST
1 GEDC
2 VERS 5.5
1 CHAR UTF-8
0 @I1@ INDI
1 NAME Ahmad /Haddad/
1 SEX M
1 FAMS @F1@
0 @I2@ INDI
1 NAME Fatima /Khoury/
1 SEX F
1 FAMS @F1@
0 @I3@ INDI
1 NAME Omar /Haddad/
1 SEX M
1 FAMC @F1@
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 MARR
2 DATE 10 JUN 1975
2 PLAC Aleppo
1 CHIL @I3@
0 TRLR"""


@pytest.fixture
def arabic_gedcom_data():
    """Individual with an Arabic name carrying kunya, patronymic and nisba"""
    return """0 HEAD
1 CHAR UTF-8
0 @I1@ INDI
1 NAME أبو محمد أحمد بن علي الدمشقي
1 SEX M
1 BIRT
2 DATE 2 DEC 1982
0 TRLR"""


class BaseTestConfig:
    """Test configuration without environment variables"""
    def __init__(self):
        self.secret_key = 'test-secret-key'
        self.gedcom_max_upload_bytes = 10 * 1024 * 1024
        self.gedcom_submitter_name = 'Test Submitter'
        self.gedcom_submitter_email = None


@pytest.fixture
def test_config():
    return BaseTestConfig()


@pytest.fixture
def app(test_config):
    """Create Flask app for testing"""
    app = create_app(test_config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client"""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Flask CLI test runner"""
    return app.test_cli_runner()
