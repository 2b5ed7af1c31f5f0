"""
forecast_dag.py — Hourly forecast ETL pipeline.

Task flow:
  extract → transform → load

  extract   : fetch raw hourly forecast JSON from Open-Meteo
  transform : parse JSON into WeatherData, hand it on as JSON text
  load      : upsert observations into hourly_forecast (ON CONFLICT DO NOTHING)
"""

import logging
import sys

from datetime import datetime

from airflow import DAG
from airflow.operators.python import PythonOperator

sys.path.insert(0, "/opt/airflow")

log = logging.getLogger(__name__)


# ── Task callables ─────────────────────────────────────────────────────────────

def run_extract(**context):
    from forecast.extract import extract
    raw_data = extract()
    context["ti"].xcom_push(key="raw_data", value=raw_data)
    log.info("extract complete")


def run_transform(**context):
    from forecast.serialize import to_json
    from forecast.transform import parse_forecast

    raw_data = context["ti"].xcom_pull(key="raw_data", task_ids="extract")
    weather = parse_forecast(raw_data)

    context["ti"].xcom_push(key="weather", value=to_json(weather))
    log.info("transform complete — %d observations", len(weather))


def run_load(**context):
    from forecast.load import load
    from forecast.transform import parse_forecast_text, to_dataframe

    weather_json = context["ti"].xcom_pull(key="weather", task_ids="transform")
    load(to_dataframe(parse_forecast_text(weather_json)))
    log.info("load complete")


# ── DAG definition ─────────────────────────────────────────────────────────────

with DAG(
    dag_id="hourly_forecast_etl",
    description="Hourly ETL: Open-Meteo hourly forecast → PostgreSQL",
    schedule="@hourly",
    start_date=datetime(2024, 1, 1),
    catchup=False,
    tags=["weather", "forecast", "etl"],
) as dag:

    extract_task = PythonOperator(
        task_id="extract",
        python_callable=run_extract,
    )

    transform_task = PythonOperator(
        task_id="transform",
        python_callable=run_transform,
    )

    load_task = PythonOperator(
        task_id="load",
        python_callable=run_load,
    )

    extract_task >> transform_task >> load_task
