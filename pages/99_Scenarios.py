import io

import pandas as pd
import streamlit as st

from aircraft_limits import VARIANTS
from data_loaders import load_scenarios_csv, resolve_data_path
from scenario_runner import evaluate_scenarios
from tanker_settings import load_settings, limits_table

st.set_page_config(page_title="Scenario Check", layout="wide")
st.title("Scenario Check — batch tankering")

st.markdown("""
Paste scenario rows or upload a CSV with the following columns:

```
model,variant,taxi,sector4,sector3,sector2,sector1,zfw,trip_plus_taxi
```

Taxi may be in tons (0.2) or kg (200); everything else in kg. Empty cells count as 0.
""")

cfg = load_settings()

with st.sidebar:
    st.header("Options")
    force = st.checkbox("Apply one engine variant to all rows", value=False)
    variant = st.selectbox("Variant", list(VARIANTS), disabled=not force)

tab_paste, tab_upload = st.tabs(["Paste data", "Upload CSV"])

with tab_paste:
    with open(resolve_data_path(None, "sample_scenarios.csv")) as f:
        sample = f.read()
    txt = st.text_area("Paste CSV rows here", sample, height=200)

with tab_upload:
    up = st.file_uploader("Upload CSV", type=["csv"])

source = up if up is not None else io.StringIO(txt.strip())
try:
    df = load_scenarios_csv(source)
    out = evaluate_scenarios(df, variant if force else None, limits_table(cfg))
except (ValueError, pd.errors.ParserError) as e:
    st.error(f"Could not evaluate scenarios: {e}")
    st.stop()

st.subheader("Results")
st.dataframe(out, use_container_width=True)

flagged = out[out["tow_exceeds"] | out["lwg_exceeds"] | out["tank_exceeds"]]
if flagged.empty:
    st.success("All scenarios within MTOW / MLW / tank-allowed limits.")
else:
    st.error(f"{len(flagged)} scenario(s) exceed a limit.")

st.download_button(
    label="Download results CSV",
    data=out.to_csv(index=False).encode("utf-8"),
    file_name="tanker_results.csv",
    mime="text/csv"
)
