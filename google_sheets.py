import os
from dotenv import load_dotenv
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from eventplanner.gsheets import SheetsWorkbook

SCOPES = ['https://www.googleapis.com/auth/spreadsheets']

DEFAULT_SERVICE_ACC_FILE = ".credentials/planner-service-account-key.json"


def get_sheets_service(service_account_file=None):
    # Load environment variables
    load_dotenv()

    key_file = service_account_file or os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE", DEFAULT_SERVICE_ACC_FILE)
    if not os.path.exists(key_file):
        raise ValueError(f"Service account key file not found: {key_file}")

    credentials = Credentials.from_service_account_file(key_file, scopes=SCOPES)
    # cache_discovery=False: the file cache needs oauth2client, which is not installed
    return build('sheets', 'v4', credentials=credentials, cache_discovery=False)


def get_workbook(spreadsheet_id=None, service_account_file=None):
    load_dotenv()

    spreadsheet_id = spreadsheet_id or os.getenv("SPREADSHEET_ID")
    if not spreadsheet_id:
        raise ValueError("Spreadsheet ID not found in .env file")

    return SheetsWorkbook(get_sheets_service(service_account_file), spreadsheet_id)
