"""Shared fixtures for the credit-trends test suite."""

import pytest

from credit_trends.data.loader import parse_records, records_to_frame
from credit_trends.data.store import DataStore


HEADER = "Year,State,Tax_Credit_Type,Sector,Claimed_Amount,Claims_Count,Income_Bracket,Source"

SAMPLE_ROWS = [
    "2020,CA,R&D,Tech,1000,2,High,IRS",
    "2020,CA,R&D,Tech,500,1,High,IRS",
    "2021,TX,EITC,Retail,300,6,Low,IRS",
    "2021,NY,R&D,Finance,200,4,Middle,State",
    "2022,CA,Solar,Energy,750.5,3,High,State",
    "2022,WA,EITC,Retail,0,0,Low,IRS",
]


def make_csv(rows, header=HEADER):
    return "\n".join([header] + list(rows))


@pytest.fixture
def sample_text():
    return make_csv(SAMPLE_ROWS)


@pytest.fixture
def sample_records(sample_text):
    return parse_records(sample_text)


@pytest.fixture
def sample_df(sample_records):
    return records_to_frame(sample_records)


@pytest.fixture
def loaded_store(sample_text):
    return DataStore().load_text(sample_text, source_name="sample.csv")
