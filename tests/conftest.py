import pytest

from schedule_synth.ingest import time_spec_from_string
from schedule_synth.models import Meeting, Section


def make_section(section_id, course_id, *meetings, label=None):
    """meetings: (days, start, duration) tuples."""
    return Section(
        id=section_id,
        course_id=course_id,
        course_label=label or course_id,
        meetings=[
            Meeting(days_of_week=days, start_time=time_spec_from_string(start), duration=duration)
            for days, start, duration in meetings
        ],
    )


@pytest.fixture
def cs180_ma261():
    return [
        make_section(1, "CS180", ("MWF", "09:00:00", "PT50M")),
        make_section(2, "MA261", ("MWF", "09:20:00", "PT50M")),
    ]
