from poststore.collections import PostCollection
from poststore.content import PostMetadata


def meta(post_id, date):
    return PostMetadata(id=post_id, title=post_id.upper(), date=date)


def test_post_collection_sequence_behaviour():
    posts = PostCollection([meta("a", "2020-01-01"), meta("b", "2021-06-01")])
    assert len(posts) == 2
    assert posts[0].id == "a"
    assert [p.id for p in posts] == ["a", "b"]
    assert posts.ids() == ["a", "b"]


def test_sorted_newest_first_with_id_tiebreak():
    posts = PostCollection(
        [
            meta("c", "2021-01-01"),
            meta("a", "2021-01-01"),
            meta("old", "2019-05-05"),
            meta("b", "2021-01-01"),
            meta("late", "2021-01-01T12:00:00"),
        ]
    )
    assert posts.sorted().ids() == ["late", "a", "b", "c", "old"]
    assert posts.sorted(reverse=False).ids() == ["old", "a", "b", "c", "late"]
    # original order is untouched
    assert posts.ids() == ["c", "a", "old", "b", "late"]


def test_latest():
    posts = PostCollection([meta("a", "2020-01-01"), meta("b", "2021-06-01"), meta("c", "2019-01-01")])
    assert posts.latest(2).ids() == ["b", "a"]
    assert posts.latest(10).ids() == ["b", "a", "c"]
    assert posts.latest(0).ids() == []
