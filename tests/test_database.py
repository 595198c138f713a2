import asyncio
from datetime import datetime, timedelta, timezone

from coursehub.courses import database
from coursehub.courses.app import startup_course_system
from coursehub.courses.schemas import COURSES, ENROLLMENTS, LESSONS, RELATIONS, USERS


def test_exact_match_query_drops_missing_filters():
    assert database.exact_match_query(student=None, course=None) == {}
    assert database.exact_match_query(student='USR_1', course=None) == {'student': 'USR_1'}
    assert database.exact_match_query(student='USR_1', course='CRS_1') == {'student': 'USR_1', 'course': 'CRS_1'}


def test_title_match_query_escapes_pattern():
    assert database.title_match_query(None) == {}
    assert database.title_match_query('') == {}
    q = database.title_match_query('Node.js')
    assert q == {'title': {'$regex': r'Node\.js', '$options': 'i'}}


def test_serialize_mongo_exposes_id():
    doc = {'_id': 'CRS_1', 'title': 'T', '__v': 3}
    assert database.serialize_mongo(doc) == {'id': 'CRS_1', 'title': 'T'}
    assert doc['_id'] == 'CRS_1'
    assert database.serialize_mongo(None) is None


def test_generate_id_uses_prefix():
    ids = {database.generate_id('CRS') for _ in range(50)}
    assert len(ids) == 50
    assert all(i.startswith('CRS_') for i in ids)


def test_every_relation_targets_a_known_collection():
    for collection, relations in RELATIONS.items():
        assert collection in database.ID_PREFIXES
        for target, _ in relations.values():
            assert target in database.ID_PREFIXES


def test_expand_relations_resolves_and_tolerates_dangling(db):
    async def scenario():
        await db[USERS].insert_one({'_id': 'USR_1', 'name': 'Ann', 'email': 'a@x', 'role': 'instructor'})
        await db[LESSONS].insert_one({'_id': 'LSN_1', 'title': 'L', 'course': 'CRS_1'})
        docs = [
            {'id': 'CRS_1', 'title': 'A', 'instructor': 'USR_1', 'lessons': ['LSN_1', 'LSN_GONE']},
            {'id': 'CRS_2', 'title': 'B', 'instructor': 'USR_GONE', 'lessons': []},
        ]
        return await database.expand_relations(db, COURSES, docs)

    first, second = asyncio.run(scenario())
    assert first['instructor'] == {'id': 'USR_1', 'name': 'Ann', 'email': 'a@x', 'role': 'instructor'}
    assert first['lessons'] == [{'id': 'LSN_1', 'title': 'L', 'course': 'CRS_1'}]
    assert second['instructor'] is None
    assert second['lessons'] == []


def test_update_document_without_fields_is_a_read(db):
    async def scenario():
        await db[ENROLLMENTS].insert_one({'_id': 'ENR_1', 'student': 'USR_1', 'course': 'CRS_1'})
        return await database.update_document(db, ENROLLMENTS, 'ENR_1', {})

    assert asyncio.run(scenario()) == {'id': 'ENR_1', 'student': 'USR_1', 'course': 'CRS_1'}


def test_startup_creates_indexes_without_validators(db):
    asyncio.run(startup_course_system(db))


def test_store_datetime_is_naive_utc_milliseconds():
    aware = datetime(2024, 1, 15, 10, 0, 0, 123456, tzinfo=timezone(timedelta(hours=5)))
    assert database.store_datetime(aware) == datetime(2024, 1, 15, 5, 0, 0, 123000)
    assert database.store_datetime(datetime(2024, 1, 15, 10, 0, 0, 999)) == datetime(2024, 1, 15, 10, 0, 0)


def test_exact_match_query_ignores_empty_values():
    assert database.exact_match_query(course='', lesson='LSN_1') == {'lesson': 'LSN_1'}
