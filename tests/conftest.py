"""
PyTest Configuration and Fixtures
=================================

Shared fixtures and record factories for feedmerge tests.
"""

import pendulum
import pytest

from feedmerge.models import ArticleRaw, Category, PodcastRaw, Record, VideoRaw


def make_record(identity, category="article", date="2024-01-01T00:00:00Z", **fields):
    """Build a Record with sensible defaults."""
    return Record(
        identity=identity,
        category=Category(category),
        timestamp=pendulum.parse(date),
        title=fields.pop("title", f"Title {identity}"),
        url=fields.pop("url", f"https://example.com/{identity}"),
        **fields,
    )


def make_video_item(video_id, published_at="2024-01-01T00:00:00Z", **snippet):
    """Build a YouTube search result item."""
    return {
        "kind": "youtube#searchResult",
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "publishedAt": published_at,
            "channelTitle": snippet.pop("channelTitle", "Test Channel"),
            "title": snippet.pop("title", f"Video {video_id}"),
            "description": snippet.pop("description", ""),
            "thumbnails": snippet.pop(
                "thumbnails",
                {"high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"}},
            ),
            **snippet,
        },
    }


SAMPLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
    <channel>
        <title>Test RSS Feed</title>
        <link>http://example.com</link>
        <description>Test feed for validation</description>
        <item>
            <title>  First Article  </title>
            <link>http://example.com/article1</link>
            <description>First description</description>
            <pubDate>Thu, 05 Sep 2024 12:00:00 GMT</pubDate>
            <guid>article-1-guid</guid>
            <media:thumbnail url="http://example.com/thumb1.jpg"/>
        </item>
        <item>
            <title>Second Article</title>
            <link>http://example.com/article2</link>
            <description>Second description</description>
            <pubDate>not a date</pubDate>
        </item>
    </channel>
</rss>"""

SAMPLE_ATOM = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
    <title>Test Atom Feed</title>
    <id>urn:feed</id>
    <updated>2024-09-06T00:00:00Z</updated>
    <entry>
        <title>Atom Entry</title>
        <link href="http://example.com/atom1"/>
        <id>urn:entry:1</id>
        <updated>2024-09-06T08:30:00Z</updated>
        <summary>Atom summary</summary>
    </entry>
</feed>"""

SAMPLE_PODCAST = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
    <channel>
        <title>Test Podcast</title>
        <link>http://example.com/podcast</link>
        <description>Podcast feed</description>
        <item>
            <title>Episode 1</title>
            <link>http://example.com/ep1</link>
            <description>Episode notes</description>
            <pubDate>Wed, 04 Sep 2024 09:00:00 GMT</pubDate>
            <guid>episode-1</guid>
            <enclosure url="http://example.com/ep1.mp3" length="1234" type="audio/mpeg"/>
        </item>
    </channel>
</rss>"""


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def video_item_factory():
    return make_video_item


@pytest.fixture
def article_raw():
    return ArticleRaw(
        origin="Example News",
        data={
            "id": "guid-1",
            "title": "  Hello World  ",
            "link": "https://example.com/hello",
            "published": "2024-03-01T10:00:00Z",
            "summary": "<p>Summary</p>",
            "media_thumbnail": [{"url": "https://example.com/thumb.jpg"}],
        },
    )


@pytest.fixture
def podcast_raw():
    return PodcastRaw(
        origin="Example Cast",
        region="EU",
        data={
            "title": "Episode 7",
            "link": "https://example.com/ep7",
            "published": "2024-03-02T08:00:00Z",
            "enclosures": [{"href": "https://example.com/ep7.mp3", "type": "audio/mpeg"}],
        },
    )


@pytest.fixture
def video_raw():
    return VideoRaw(origin="YouTube", data=make_video_item("abc123", "2024-03-03T12:00:00Z"))


@pytest.fixture
def sample_rss():
    return SAMPLE_RSS


@pytest.fixture
def sample_atom():
    return SAMPLE_ATOM


@pytest.fixture
def sample_podcast():
    return SAMPLE_PODCAST
