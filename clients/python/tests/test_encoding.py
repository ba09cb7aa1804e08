import json
from datetime import datetime, timezone
from urllib.parse import unquote

from sleepy.encoding import (
    GET,
    POST,
    OpRequest,
    collection_op,
    command_op,
    connect_op,
    encode_json,
    encode_options,
)
from sleepy.types import FindOptions, InsertOptions, MoreOptions, UpdateOptions


def test_structured_value_is_percent_encoded_json():
    assert encode_options({"criteria": {"x": 1}}) == "criteria=%7B%22x%22%3A1%7D"


def test_structured_value_decodes_back():
    criteria = {"name": "a b&c", "tags": ["x", "y"], "n": {"$gt": 2.5}}
    encoded = encode_options({"criteria": criteria})
    key, value = encoded.split("=", 1)
    assert key == "criteria"
    assert "&" not in value
    assert json.loads(unquote(value)) == criteria


def test_scalars_are_verbatim():
    assert encode_options({"skip": 10, "limit": 5, "id": "abc"}) == "skip=10&limit=5&id=abc"


def test_booleans_are_lowercase():
    assert encode_options({"multi": True, "upsert": False}) == "multi=true&upsert=false"


def test_mapping_order_is_kept():
    encoded = encode_options({"limit": 5, "criteria": {"x": 1}})
    assert encoded == "limit=5&criteria=%7B%22x%22%3A1%7D"


def test_none_options_encode_to_empty_string():
    assert encode_options(None) == ""
    assert encode_options({}) == ""


def test_none_value_in_mapping_is_json_null():
    assert encode_options({"criteria": None}) == "criteria=null"


def test_insert_docs_encoding():
    assert encode_options({"docs": [{"a": 1}]}) == "docs=%5B%7B%22a%22%3A1%7D%5D"


def test_dataclass_options_drop_unset_fields():
    options = FindOptions(criteria={"x": 1}, limit=5)
    assert options.to_params() == {"criteria": {"x": 1}, "limit": 5}
    assert encode_options(options) == "criteria=%7B%22x%22%3A1%7D&limit=5"


def test_dataclass_options_keep_declaration_order():
    options = UpdateOptions(criteria={"a": 1}, newobj={"$set": {"b": 2}})
    assert list(options.to_params()) == ["criteria", "newobj"]
    assert encode_options(MoreOptions(id=42)) == "id=42"
    assert encode_options(InsertOptions(docs=[])) == "docs=%5B%5D"


def test_datetime_is_sent_as_date_hint():
    when = datetime(2010, 1, 1, tzinfo=timezone.utc)
    assert json.loads(unquote(encode_json(when))) == {"$date": 1262304000000}


def test_collection_op_path_and_method():
    request = collection_op(GET, "db", "coll", "_find", {"limit": 5})
    assert request == OpRequest(GET, "/db/coll/_find", "limit=5")
    assert request.url("http://gw") == "http://gw/db/coll/_find?limit=5"
    assert request.content is None


def test_post_args_go_in_body():
    request = collection_op(POST, "db", "coll", "_remove", None)
    assert request.url("http://gw") == "http://gw/db/coll/_remove"
    assert request.content == ""


def test_get_without_args_has_no_query():
    request = collection_op(GET, "db", "coll", "_find", None)
    assert request.url("http://gw") == "http://gw/db/coll/_find"


def test_connect_op():
    assert connect_op("localhost:27017").args == "server=localhost:27017"
    assert connect_op("h:1", "primary").args == "server=h:1&name=primary"
    assert connect_op("h:1", "").args == "server=h:1"


def test_command_op_paths():
    assert command_op(None, {"ping": 1}).path == "/_cmd"
    assert command_op("", {"ping": 1}).path == "/_cmd"
    assert command_op("db", {"ping": 1}).path == "/db/_cmd"
    assert command_op("db", {"ping": 1}).args == "obj=%7B%22ping%22%3A1%7D"
