"""
PersonGen - Streamlit Dashboard
===============================
Drives both artifact flows interactively.

Features:
1. Record generation controls
2. Batch overview and diversity charts
3. Artifact validation & report panel
4. Artifact downloads

Run with: streamlit run src/persongen/app.py
"""

import json
from datetime import datetime

import pandas as pd
import plotly.express as px
import streamlit as st
import yaml

from persongen import __version__
from persongen.artifacts import MissingArtifactsError, records_to_frame
from persongen.config import (
    GenerationConfig, PathsConfig, PipelineConfig, ValidationConfig,
    SUPPORTED_FORMATS
)
from persongen.generator import PersonDataGenerator
from persongen.models import ReportStatus
from persongen.report import render_text_report
from persongen.validation import PersonDataValidator


# ============================================================
# PAGE CONFIG & SESSION STATE
# ============================================================

st.set_page_config(
    page_title="PersonGen Artifacts",
    layout="wide",
    initial_sidebar_state="expanded"
)

for key in ('records_df', 'generation', 'validation', 'config'):
    if key not in st.session_state:
        st.session_state[key] = None


# ============================================================
# SIDEBAR - CONTROLS
# ============================================================

def render_sidebar():
    """Render sidebar controls"""
    st.sidebar.title("PersonGen")
    st.sidebar.markdown("---")

    st.sidebar.subheader("⚙️ Generation")

    record_count = st.sidebar.number_input(
        "Records",
        min_value=0,
        max_value=100000,
        value=10,
        step=10,
        help="Number of synthetic person records to generate"
    )

    seed = st.sidebar.number_input(
        "Random Seed",
        min_value=1,
        max_value=9999,
        value=42,
        help="For reproducibility"
    )

    formats = st.sidebar.multiselect(
        "Output Formats",
        options=list(SUPPORTED_FORMATS),
        default=["json"]
    )

    output_dir = st.sidebar.text_input("Output Directory", value="output")

    st.sidebar.markdown("---")
    st.sidebar.subheader("🔍 Validation")

    artifacts_dir = st.sidebar.text_input("Artifacts Directory", value="downloaded-artifacts")
    include_csv = st.sidebar.checkbox("Scan CSV artifact", value=False)
    max_invalid_ratio = st.sidebar.slider(
        "Max Invalid Ratio",
        min_value=0.0,
        max_value=1.0,
        value=0.1,
        step=0.01,
        help="Share of invalid records tolerated by the acceptance gate"
    )

    st.sidebar.markdown("---")

    col1, col2 = st.sidebar.columns(2)

    with col1:
        generate_clicked = st.button("🚀 Generate", type="primary", use_container_width=True)

    with col2:
        validate_clicked = st.button("✅ Validate", use_container_width=True)

    if st.sidebar.button("🗑️ Clear", use_container_width=True):
        for key in ('records_df', 'generation', 'validation', 'config'):
            st.session_state[key] = None
        st.rerun()

    config = PipelineConfig(
        generation=GenerationConfig(
            record_count=int(record_count),
            seed=int(seed),
            formats=formats or ["json"],
        ),
        paths=PathsConfig(output_dir=output_dir, artifacts_dir=artifacts_dir),
        validation=ValidationConfig(
            include_csv=include_csv,
            max_invalid_ratio=max_invalid_ratio,
        ),
    )

    return {
        'generate': generate_clicked,
        'validate': validate_clicked,
        'config': config,
    }


# ============================================================
# ACTIONS
# ============================================================

def generate_data(config: PipelineConfig) -> bool:
    try:
        generator = PersonDataGenerator(config)
        output = generator.run()
    except (OSError, ValueError) as e:
        st.error(f"Generation failed: {str(e)}")
        return False

    st.session_state.records_df = records_to_frame(output.records)
    st.session_state.generation = output
    st.session_state.config = config
    return True


def validate_data(config: PipelineConfig) -> bool:
    try:
        result = PersonDataValidator(config).run()
    except MissingArtifactsError as e:
        st.error(str(e))
        return False
    except (OSError, ValueError) as e:
        st.error(f"Validation failed: {str(e)}")
        return False

    st.session_state.validation = result
    st.session_state.config = config
    return True


# ============================================================
# TABS
# ============================================================

def render_overview_tab():
    df = st.session_state.records_df
    output = st.session_state.generation

    if df is None:
        st.info("👈 Configure parameters and click **Generate** to create records")
        return

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Records", f"{len(df):,}")
    col2.metric("Unique IDs", f"{df['id'].nunique():,}")
    col3.metric("Unique Emails", f"{df['email'].nunique():,}")
    col4.metric("Formats", ", ".join(output.metadata.formats))

    st.markdown("---")
    st.subheader("👀 Record Preview")
    st.dataframe(df.head(100), use_container_width=True)


def render_diversity_tab():
    df = st.session_state.records_df

    if df is None:
        st.info("Generate data to view diversity")
        return

    col1, col2 = st.columns(2)

    with col1:
        countries = df['country'].value_counts().head(20)
        fig = px.bar(
            x=countries.values,
            y=countries.index,
            orientation='h',
            title='Top Countries',
            color_discrete_sequence=['#3498db']
        )
        fig.update_layout(xaxis_title='Records', yaxis_title='Country')
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        states = df['state'].value_counts().head(20)
        fig = px.bar(
            x=states.values,
            y=states.index,
            orientation='h',
            title='Top States',
            color_discrete_sequence=['#2ecc71']
        )
        fig.update_layout(xaxis_title='Records', yaxis_title='State')
        st.plotly_chart(fig, use_container_width=True)

    domains = df['email'].str.split('@').str[-1].value_counts()
    fig = px.pie(values=domains.values, names=domains.index, title='Email Domains')
    st.plotly_chart(fig, use_container_width=True)


def render_validation_tab():
    result = st.session_state.validation
    config = st.session_state.config

    if result is None:
        st.info("Click **Validate** to check the artifacts directory")
        return

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Records", f"{result.total_records:,}")
    col2.metric("Valid", f"{result.valid_records:,}")
    col3.metric("Invalid", f"{result.invalid_records:,}")
    col4.metric("Success Rate", f"{result.success_rate:.2f}%")

    if result.status == ReportStatus.PASSED:
        st.success(result.status.value)
    else:
        st.error(result.status.value)

    if not result.is_acceptable(config.validation.max_invalid_ratio):
        st.warning("Acceptance gate not met")

    summary = result.summary.to_dict()
    col1, col2 = st.columns(2)
    col1.metric("Countries", len(summary['countries']))
    col2.metric("Companies", len(summary['companies']))

    st.subheader("❌ Errors")
    if result.errors:
        st.dataframe(pd.DataFrame({'error': result.errors}), use_container_width=True)
    else:
        st.write("No errors found")

    with st.expander("Readable report"):
        st.code(render_text_report(result), language='text')


def render_export_tab():
    output = st.session_state.generation
    result = st.session_state.validation

    if output is None and result is None:
        st.info("Generate or validate data to enable export")
        return

    st.subheader("📥 Export Artifacts")

    col1, col2, col3 = st.columns(3)

    if output is not None:
        with col1:
            st.markdown("### Records")
            st.download_button(
                "📄 Download JSON",
                json.dumps([r.to_dict() for r in output.records], indent=2),
                "person-data.json",
                "application/json",
                use_container_width=True
            )
            st.download_button(
                "📄 Download CSV",
                st.session_state.records_df.to_csv(index=False),
                "person-data.csv",
                "text/csv",
                use_container_width=True
            )
            st.download_button(
                "📋 Download Metadata",
                json.dumps(output.metadata.to_dict(), indent=2),
                "metadata.json",
                "application/json",
                use_container_width=True
            )

    if result is not None:
        with col2:
            st.markdown("### Validation")
            st.download_button(
                "📊 Download Report JSON",
                json.dumps(result.to_dict(), indent=2),
                "validation-report.json",
                "application/json",
                use_container_width=True
            )
            st.download_button(
                "📝 Download Report Text",
                render_text_report(result),
                "validation-report.txt",
                "text/plain",
                use_container_width=True
            )

    with col3:
        st.markdown("### Configuration")
        config = st.session_state.config
        if config:
            st.download_button(
                "⚙️ Download Config YAML",
                yaml.dump(config.to_dict(), default_flow_style=False),
                "pipeline_config.yaml",
                "text/yaml",
                use_container_width=True
            )


# ============================================================
# MAIN APP
# ============================================================

def main():
    """Main application entry point"""
    params = render_sidebar()

    st.title("PersonGen Artifact Pipeline")
    st.markdown("""
    **Synthetic person records** produced by one run and validated by another.

    - Generate records and metadata into the output directory
    - Validate a downloaded artifacts directory and write reports
    """)

    if params['generate']:
        with st.spinner("Generating records..."):
            if generate_data(params['config']):
                st.success("✅ Data generated successfully!")

    if params['validate']:
        with st.spinner("Validating artifacts..."):
            if validate_data(params['config']):
                st.success("✅ Validation completed")

    st.markdown("---")

    tab1, tab2, tab3, tab4 = st.tabs([
        "📊 Overview",
        "🌍 Diversity",
        "🔍 Validation",
        "📥 Export"
    ])

    with tab1:
        render_overview_tab()

    with tab2:
        render_diversity_tab()

    with tab3:
        render_validation_tab()

    with tab4:
        render_export_tab()

    st.markdown("---")
    st.caption(
        f"PersonGen v{__version__} | "
        f"Rendered: {datetime.now().strftime('%Y-%m-%d %H:%M')}"
    )


if __name__ == "__main__":
    main()
