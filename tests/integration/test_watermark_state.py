from services.watermark import (
    DEFAULT_POSITION,
    get_watermark,
    latest_position,
    reset_watermark,
    save_watermark,
)


def test_missing_watermark_defaults_to_epoch(db_session):
    watermark = get_watermark(db_session)

    assert watermark.last_source_position == DEFAULT_POSITION
    assert watermark.last_run_at is None


def test_save_and_reset_watermark(db_session):
    save_watermark(db_session, "2024-05-01T10:00:00.000Z", {"articles_processed": 3})
    db_session.commit()

    watermark = get_watermark(db_session)
    assert watermark.last_source_position == "2024-05-01T10:00:00+00:00"
    assert watermark.counters == {"articles_processed": 3}
    assert watermark.last_run_at is not None

    save_watermark(db_session, "2024-06-01T00:00:00Z", {})
    assert get_watermark(db_session).last_source_position == "2024-06-01T00:00:00+00:00"

    reset_watermark(db_session)
    assert get_watermark(db_session).last_source_position == DEFAULT_POSITION


def test_latest_position():
    assert latest_position(None, "2024-05-01T10:00:00Z") == "2024-05-01T10:00:00+00:00"
    assert latest_position("2024-05-02T00:00:00+00:00", "2024-05-01T10:00:00Z") == "2024-05-02T00:00:00+00:00"
    assert latest_position("2024-05-01T00:00:00+00:00", "garbage") == "2024-05-01T00:00:00+00:00"
