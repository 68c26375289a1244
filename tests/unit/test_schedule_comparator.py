from app.services.utils.schedule_comparator import compare_lessons


def test_identical_schedules_have_no_changes(make_lesson):
    lessons = [make_lesson(), make_lesson(start_time="10:40")]
    assert compare_lessons(lessons, list(lessons)) == {}


def test_detects_modified_added_and_removed(make_lesson):
    old = [
        make_lesson(subject="Математика"),
        make_lesson(start_time="10:40", subject="Фізика"),
    ]
    new = [
        make_lesson(subject="Математика", classroom="105"),
        make_lesson(start_time="12:20", subject="Хімія"),
    ]

    changes = compare_lessons(old, new)

    assert len(changes['modified']) == 1
    assert changes['modified'][0]['old']['classroom'] == "101"
    assert changes['modified'][0]['new']['classroom'] == "105"
    assert [c['start_time'] for c in changes['added']] == ["12:20"]
    assert [c['start_time'] for c in changes['removed']] == ["10:40"]


def test_week_halves_are_separate_slots(make_lesson):
    old = [make_lesson(subject="Математика", week_number=1)]
    new = [make_lesson(subject="Математика", week_number=1), make_lesson(subject="Фізика", week_number=2)]

    changes = compare_lessons(old, new)

    assert changes['modified'] == []
    assert changes['added'][0]['week_number'] == 2


def test_lesson_ids_do_not_matter(make_lesson):
    assert compare_lessons([make_lesson(id="a")], [make_lesson(id="b")]) == {}
