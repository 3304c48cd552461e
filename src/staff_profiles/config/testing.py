import os

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "store_admin_test",
    "url": os.getenv("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
SQL_ECHO = False

AUTO_INIT_DB = True
AUTO_SEED_DB = False

UPDATE_POSITION_CODE = 100

PASSWORD_RESET_URL = "http://testserver/password/reset/{token}?email={email}"

MAIL_BACKEND = "log"
MAIL_SERVER = "localhost"
MAIL_PORT = 1025
MAIL_USE_TLS = False
MAIL_USERNAME = ""
MAIL_PASSWORD = ""
MAIL_SENDER = "no-reply@testserver"
