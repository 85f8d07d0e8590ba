import streamlit as st
import pandas as pd

from sgpa.aggregator import compute_sgpa
from sgpa.io_csv import parse_predict_subjects, parse_subjects, read_csv_upload, validate_marks_csv
from sgpa.models import PredictionStatus
from sgpa.predictor import predict_required_marks
from sgpa.report import breakdown_frame, required_marks_frame

# ------------------------
# Streamlit UI (with optional CSV upload)
# ------------------------

st.set_page_config(
    page_title="SGPA Calculator & Predictor",
    page_icon="🎓",
    layout="wide",
)

st.title("🎓 SGPA Calculator & Predictor")
st.write(
    "Work out your SGPA from component marks (attendance, CA, midterm, endterm), "
    "or find the score you still need on pending components to reach a target SGPA."
)

MODES = {
    "SGPA Calculator": "calculate",
    "SGPA Predictor": "predict",
}

mode = MODES[st.radio("Mode", list(MODES.keys()), horizontal=True)]

WEIGHTS = {
    "attendance_weight": 10.0,
    "ca_weight": 30.0,
    "midterm_weight": 20.0,
    "endterm_weight": 40.0,
}

# ---- Defaults (used if no upload) ----
default_calculate = pd.DataFrame(
    [
        {"subject": "Data Structures", "credit": 4.0, **WEIGHTS, "component": "attendance", "obtained": 9.0, "total": 10.0},
        {"subject": "Data Structures", "credit": 4.0, **WEIGHTS, "component": "ca", "obtained": 24.0, "total": 30.0},
        {"subject": "Data Structures", "credit": 4.0, **WEIGHTS, "component": "midterm", "obtained": 16.0, "total": 20.0},
        {"subject": "Data Structures", "credit": 4.0, **WEIGHTS, "component": "endterm", "obtained": 35.0, "total": 40.0},
    ]
)
default_predict = pd.DataFrame(
    [
        {"subject": "Algorithms", "credit": 4.0, "attendance_weight": 0.0, "ca_weight": 0.0,
         "midterm_weight": 50.0, "endterm_weight": 50.0, "component": "midterm",
         "obtained": 40.0, "total": 50.0, "completed": True},
        {"subject": "Algorithms", "credit": 4.0, "attendance_weight": 0.0, "ca_weight": 0.0,
         "midterm_weight": 50.0, "endterm_weight": 50.0, "component": "endterm",
         "obtained": None, "total": 100.0, "completed": False},
    ]
)

predicting = mode == "predict"

with st.form(f"{mode}_input_form"):
    st.subheader("1. Enter your subjects")
    st.markdown(
        "One row per mark. Several **ca** rows for a subject are its continuous assessments, "
        "in order. All rows of a subject must give the same credit and weights."
        + (" Tick **completed** for marks you already have." if predicting else "")
    )

    uploaded_csv = st.file_uploader(
        "Optionally upload marks CSV",
        type=["csv"],
        key=f"{mode}_csv",
    )

    seed = default_predict if predicting else default_calculate
    upload_error = None
    if uploaded_csv is not None:
        try:
            seed = validate_marks_csv(read_csv_upload(uploaded_csv), with_completion=predicting)
        except ValueError as e:
            upload_error = str(e)

    if upload_error:
        st.error(f"CSV error: {upload_error}")

    column_config = {
        "credit": st.column_config.NumberColumn("credit", step=0.5),
        "obtained": st.column_config.NumberColumn("obtained", step=0.5),
        "total": st.column_config.NumberColumn("total", step=0.5),
    }
    if predicting:
        column_config["completed"] = st.column_config.CheckboxColumn("completed")

    marks_df = st.data_editor(
        seed,
        key=f"{mode}_df",
        num_rows="dynamic",
        use_container_width=True,
        column_config=column_config,
    )

    target_sgpa = None
    if predicting:
        st.subheader("2. Choose your target")
        target_sgpa = st.number_input(
            "Desired SGPA (0.0 - 10.0)",
            min_value=0.0,
            max_value=10.0,
            value=8.0,
            step=0.1,
        )

    submitted = st.form_submit_button(
        "Predict Required Marks" if predicting else "Calculate SGPA",
        type="primary",
    )


if submitted:
    # If the upload was invalid, stop early so users don't get confusing results
    if uploaded_csv is not None and upload_error:
        st.warning("Please fix the CSV upload error above (or remove the upload) and try again.")
    else:
        try:
            if predicting:
                result = predict_required_marks(parse_predict_subjects(marks_df), target_sgpa)
            else:
                result = compute_sgpa(parse_subjects(marks_df))
        except ValueError as e:
            st.error(str(e))
        else:
            st.session_state[f"{mode}_result"] = result


# ------------------------
# Show result if we have it
# ------------------------

result = st.session_state.get(f"{mode}_result")

if result is not None and not predicting:
    st.markdown("---")
    st.subheader("Calculation complete")

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Your SGPA", f"{result.sgpa:.2f}")
    with col2:
        st.metric("Total credits", f"{result.total_credits:g}")

    st.markdown("### Subject breakdown")
    st.dataframe(breakdown_frame(result), use_container_width=True, hide_index=True)

elif result is not None and predicting:
    st.markdown("---")
    st.subheader("Prediction")

    if result.status == PredictionStatus.ACHIEVED:
        st.success(f"✅ {result.message}")
    elif result.status == PredictionStatus.IMPOSSIBLE:
        st.error(f"❌ {result.message}")
    else:
        st.info(result.message)
        st.metric("Required score on every pending component", f"{result.required_percentage:.2f}%")
        st.dataframe(required_marks_frame(result), use_container_width=True, hide_index=True)

else:
    st.info("Fill in your subjects and press the button to get started.")


st.header("FAQ")

st.subheader("How is the SGPA calculated?")
st.write(
    "Each subject's final percentage is the weighted sum of its component percentages "
    "(the four weights must add up to 100). All CA entries are added together before "
    "the CA percentage is taken. The grade point is the final percentage divided by 10, "
    "and the SGPA is the credit-weighted average of the grade points."
)

st.subheader("How does the predictor choose the marks I need?")
st.write(
    "It finds one percentage that, scored on every pending component, brings your SGPA "
    "up to the target. Each CA counts separately with an equal share of the CA weight."
)

st.subheader("What data do you collect or store?")
st.write(
    "This tool does **not** store, save, or transmit your data. "
    "Everything you enter is processed in your browser session and is cleared when you "
    "refresh or close the page."
)
