from __future__ import annotations

from pathlib import Path

import pytest

MASTER_CSV = """date,country,country_group,debt_gdp,deficit_gdp,gdp_growth,unemployment,inflation,spread_bps,bond_yield,ecb_rate,crisis_period,post_omt,giips,year,quarter,period
2010-03-31,Greece,GIIPS,146.2,-11.2,-4.5,11.9,2.9,310.5,6.45,1,1,0,1,2010,1,Crisis
2010-03-31,Germany,Core,82.4,-4.4,2.1,7.3,0.9,0,3.14,1,1,0,0,2010,1,Crisis
2012-12-31,Greece,GIIPS,,-8.8,-7.3,26.1,0.3,1170.25,11.9,0.75,1,1,1,2012,4,Post-OMT
2012-12-31,Germany,Core,n/a,0.0,0.4,5.4,2,0,1.32,0.75,1,1,0,2012,4,Post-OMT
"""

SPREADS_CSV = """date,Austria,France,Germany,Greece,Ireland,Italy,Netherlands,Portugal,Spain
2011-11-01,160.2,120.4,0,2300.5,720.1,450,45.3,1100,390.8
2011-12-01,150,110.2,0,,680,480.5,40,1150.2,350
"""

REGRESSION_CSV = """variable,estimate,std_error,ci_lower,ci_upper,p_value,model,se_type
debt_gdp,2.13,0.41,1.33,2.93,0.0004,m1,cluster-robust
debt_gdp,2.13,0.22,1.70,2.56,0.00001,m1,hc1
post_omt,-85.6,30.2,-144.8,-26.4,0.006,m2,cluster-robust
unemployment,12.4,9.1,-5.4,30.2,0.18,m2,cluster-robust
"""


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(name: str, text: str) -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def master_csv_text() -> str:
    return MASTER_CSV


@pytest.fixture
def master_csv(write_csv) -> str:
    return write_csv("master_panel.csv", MASTER_CSV)


@pytest.fixture
def spreads_csv(write_csv) -> str:
    return write_csv("spreads_wide.csv", SPREADS_CSV)


@pytest.fixture
def regression_csv(write_csv) -> str:
    return write_csv("regression_coefs.csv", REGRESSION_CSV)
