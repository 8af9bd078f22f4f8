"""
Shared fixtures: sample API responses and a recording transport
"""

import pytest

from osmclient import OSMClient, TransportError


NODE_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <node id="42" visible="true" version="3" changeset="1001" timestamp="2021-05-01T10:00:00Z"
        user="mapper" uid="7" lat="51.5073509" lon="-0.1277583">
    <tag k="amenity" v="cafe"/>
    <tag k="name" v="Corner Cafe"/>
  </node>
</osm>
"""

# Closed way 10 over nodes 1, 2, 3 and way 11 sharing node 5 with way 12
WAY_FULL_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <node id="1" lat="51.0" lon="-1.0" version="1"/>
  <node id="2" lat="51.1" lon="-1.0" version="1"/>
  <node id="3" lat="51.1" lon="-1.1" version="1"/>
  <way id="10" version="2" changeset="55" user="mapper" uid="7">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <nd ref="1"/>
    <tag k="building" v="yes"/>
  </way>
</osm>
"""

# Relation 100 has a node, a way, a forward reference to relation 101,
# and itself as members. Relation 101 points back at 100.
RELATION_FULL_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <relation id="100" version="1">
    <member type="node" ref="1" role="label"/>
    <member type="way" ref="10" role="outer"/>
    <member type="relation" ref="101" role="subarea"/>
    <member type="relation" ref="100" role="self"/>
    <tag k="type" v="multipolygon"/>
  </relation>
  <way id="10" version="1">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <nd ref="1"/>
  </way>
  <relation id="101" version="1">
    <member type="relation" ref="100" role="parent"/>
  </relation>
  <node id="1" lat="51.0" lon="-1.0"/>
  <node id="2" lat="51.1" lon="-1.0"/>
  <node id="3" lat="51.1" lon="-1.1"/>
</osm>
"""

MAP_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="CGImap 0.8.8">
  <bounds minlat="51.5000000" minlon="-0.1300000" maxlat="51.5100000" maxlon="-0.1200000"/>
  <node id="1" lat="51.501" lon="-0.125"/>
  <node id="2" lat="51.502" lon="-0.126"/>
  <way id="10">
    <nd ref="1"/>
    <nd ref="2"/>
    <tag k="highway" v="residential"/>
  </way>
</osm>
"""

CHANGESET_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <changeset id="1001" created_at="2021-05-01T09:58:00Z" closed_at="2021-05-01T10:02:00Z" open="false"
             user="mapper" uid="7" min_lat="51.0" min_lon="-1.1" max_lat="51.1" max_lon="-1.0"
             comments_count="1" changes_count="4">
    <tag k="comment" v="Add cafe"/>
    <tag k="created_by" v="iD 2.20"/>
    <discussion>
      <comment id="9" date="2021-05-02T08:00:00Z" uid="8" user="reviewer">
        <text>Thanks!</text>
      </comment>
    </discussion>
  </changeset>
</osm>
"""

OSM_CHANGE_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osmChange version="0.6" generator="OpenStreetMap server">
  <create>
    <node id="42" version="1" changeset="1001" lat="51.5" lon="-0.12">
      <tag k="amenity" v="cafe"/>
    </node>
  </create>
  <modify>
    <way id="10" version="3" changeset="1001">
      <nd ref="1"/>
      <nd ref="42"/>
    </way>
  </modify>
  <delete>
    <node id="7" version="2" changeset="1001" visible="false"/>
  </delete>
</osmChange>
"""

VERSIONS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm generator="OpenStreetMap server">
  <api>
    <version>0.6</version>
  </api>
</osm>
"""

CAPABILITIES_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <api>
    <version minimum="0.6" maximum="0.6"/>
    <area maximum="0.25"/>
    <note_area maximum="25"/>
    <tracepoints per_page="5000"/>
    <waynodes maximum="2000"/>
    <relationmembers maximum="32000"/>
    <changesets maximum_elements="10000" default_query_limit="100" maximum_query_limit="100"/>
    <timeout seconds="300"/>
    <status database="online" api="online" gpx="online"/>
  </api>
  <policy>
    <imagery>
      <blacklist regex=".*\\.google(apis)?\\..*/.*"/>
    </imagery>
  </policy>
</osm>
"""


class FakeTransport:
    """Serves canned responses by URL and records every request"""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.requests = []

    def send(self, url, auth=None):
        self.requests.append((url, auth))
        response = self.responses.get(url)
        if response is None:
            raise TransportError("Request failed: 404-Not Found", status_code=404,
                                 reason="Not Found", body="Not found")
        if isinstance(response, Exception):
            raise response
        return response


BASE = "https://api.test/api/"


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return OSMClient(BASE, transport=transport)
