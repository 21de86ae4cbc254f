import threading

from lessonscript.models.configs import ScriptConfig, TagVocabulary
from lessonscript.tracking.session import BlockStatus, ReadingSession


SCRIPT = [
    ("title", "Welcome"),
    ("line", "first"),
    ("att", "say it slowly"),
    ("s1", "Pick one"),
    ("s3", ""),
    ("p", "option a"),
    ("s4", ""),
    ("s3", ""),
    ("p", "option b"),
    ("s4", ""),
    ("s2", ""),
    ("line", "last"),
]


def leaf_id(session, content):
    return next(node.id for root in session.blocks for node in root.walk() if node.content == content)


def test_new_session_has_no_interactions():
    session = ReadingSession.from_rows(SCRIPT)

    assert session.interacted == frozenset()
    assert session.report().skipped == frozenset()
    assert len(session.sequence) == 5


def test_record_reports_skips():
    session = ReadingSession.from_rows(SCRIPT)

    report = session.record(leaf_id(session, "last"))

    assert report.skipped == {
        leaf_id(session, "Welcome"),
        leaf_id(session, "first"),
        leaf_id(session, "option a"),
        leaf_id(session, "option b"),
    }


def test_choosing_one_alternative_is_not_a_skip():
    session = ReadingSession.from_rows(SCRIPT)

    session.record_many([leaf_id(session, "Welcome"), leaf_id(session, "first"), leaf_id(session, "option b")])
    report = session.record(leaf_id(session, "last"))

    assert report.skipped == frozenset()


def test_repeated_events_are_idempotent():
    session = ReadingSession.from_rows(SCRIPT)
    target = leaf_id(session, "first")

    first = session.record(target)
    snapshot = session.interacted
    second = session.record(target)

    assert target in session.interacted
    assert session.interacted == snapshot
    assert first == second


def test_interactions_replace_the_set_instead_of_mutating_it():
    session = ReadingSession.from_rows(SCRIPT)
    before = session.interacted

    session.record(leaf_id(session, "first"))

    assert before == frozenset()
    assert session.interacted is not before


def test_unknown_ids_are_accepted():
    session = ReadingSession.from_rows(SCRIPT)

    report = session.record("not-a-block")

    assert "not-a-block" in session.interacted
    assert report.skipped == frozenset()


def test_status_mirrors_report():
    session = ReadingSession.from_rows(SCRIPT)
    session.record(leaf_id(session, "first"))

    assert session.status(leaf_id(session, "first")) == BlockStatus(is_clicked=True, is_skipped=False)
    assert session.status(leaf_id(session, "Welcome")) == BlockStatus(is_clicked=False, is_skipped=True)
    assert session.status(leaf_id(session, "last")) == BlockStatus(is_clicked=False, is_skipped=False)


def test_session_uses_configured_trackable_tags():
    config = ScriptConfig(vocabulary=TagVocabulary(trackable=["line"]))
    session = ReadingSession.from_rows(SCRIPT, config)

    assert len(session.sequence) == 2


def test_concurrent_records_keep_every_id():
    session = ReadingSession.from_rows([("line", str(i)) for i in range(50)])
    ids = list(session.sequence)

    threads = [threading.Thread(target=session.record, args=(block_id,)) for block_id in ids]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert session.interacted == frozenset(ids)
    assert session.report().skipped == frozenset()
