from taskmaster.queries import build_list_query, build_stats_query


def sql(statement) -> str:
    return " ".join(str(statement).split())


def test_no_filters():
    query = build_list_query()
    text = sql(query.statement)
    assert "WHERE" not in text
    assert text.endswith("FROM tasks ORDER BY tasks.created_at DESC, tasks.id DESC")
    assert query.params == []
    assert query.bindings() == {}


def test_status_filter():
    query = build_list_query(status="pending")
    assert "WHERE tasks.status = :status ORDER BY" in sql(query.statement)
    assert query.params == ["pending"]


def test_priority_filter():
    query = build_list_query(priority="high")
    assert "WHERE tasks.priority = :priority ORDER BY" in sql(query.statement)
    assert query.params == ["high"]


def test_both_filters_status_first():
    query = build_list_query(priority="high", status="pending")
    assert "WHERE tasks.status = :status AND tasks.priority = :priority ORDER BY" in sql(query.statement)
    assert query.params == ["pending", "high"]
    assert query.bindings() == {"status": "pending", "priority": "high"}


def test_values_are_never_inlined():
    query = build_list_query(status="pending'; DROP TABLE tasks; --")
    assert "DROP TABLE" not in sql(query.statement)
    assert query.params == ["pending'; DROP TABLE tasks; --"]


def test_empty_filters_are_ignored():
    query = build_list_query(status="", priority="")
    assert "WHERE" not in sql(query.statement)
    assert query.params == []


def test_deterministic():
    assert sql(build_list_query("pending", "low").statement) == sql(build_list_query("pending", "low").statement)


def test_stats_query_single_pass():
    text = sql(build_stats_query())
    assert text.count("FROM tasks") == 1
    for label in ("total", "pending", "in_progress", "completed"):
        assert f"AS {label}" in text
