"""
Unit Tests for the Signature Codec
==================================
"""

import base64
import hashlib
import hmac

import pytest

from urlsigner_core.signature import (
    RequestParts,
    SignatureCodec,
    normalize_token,
    extract_param,
    get_param,
    append_param,
)

from .conftest import SECRET


def expected_digest(secret: str, message: str) -> str:
    mac = hmac.new(secret.encode(), message.encode(), hashlib.sha256).digest()
    return base64.b64encode(mac).decode()


class TestSign:
    """Tests for signing URLs."""
    
    def test_round_trip(self, codec):
        """A freshly signed URL should check."""
        for url in (
            "https://example.com/reset?id=42",
            "https://example.com/",
            "http://localhost:8000/a/b/c?x=1&y=two&z=",
            "/relative/path?x=1",
            "https://example.com/caf%C3%A9?q=a+b",
        ):
            assert codec.check(codec.sign(url)) is True
    
    def test_signature_appended_last(self, codec):
        """The signature should be the last query parameter."""
        signed = codec.sign("https://example.com/reset?id=42")
        
        assert signed.startswith("https://example.com/reset?id=42&_hash=")
    
    def test_signature_covers_canonical_url(self, codec):
        """The digest is base64 HMAC-SHA256 over the unsigned URL."""
        signed = codec.sign("https://example.com/reset?id=42")
        
        assert get_param(signed.split("?", 1)[1], "_hash") == expected_digest(
            SECRET, "https://example.com/reset?id=42"
        )
    
    def test_url_without_query(self, codec):
        """A URL without a query gets one."""
        signed = codec.sign("https://example.com/reset")
        
        assert signed.startswith("https://example.com/reset?_hash=")
        assert codec.check(signed)
    
    def test_resigning_replaces_signature(self, codec):
        """Signing twice should not stack signatures."""
        signed = codec.sign("https://example.com/reset?id=42")
        
        assert codec.sign(signed) == signed
        assert signed.count("_hash=") == 1
    
    def test_fragment_kept_outside_signature(self, codec):
        """Fragments stay at the end and do not affect the check."""
        signed = codec.sign("https://example.com/page?x=1#section")
        
        assert signed.endswith("#section")
        assert codec.check(signed)
        assert codec.check(signed.replace("#section", ""))


class TestCheck:
    """Tests for checking signatures."""
    
    def test_tampered_query_value(self, codec):
        """Changing any query value should break the signature."""
        signed = codec.sign("https://example.com/reset?id=42")
        
        assert codec.check(signed.replace("id=42", "id=43")) is False
    
    def test_tampered_path(self, codec):
        """Changing the path should break the signature."""
        signed = codec.sign("https://example.com/reset?id=42")
        
        assert codec.check(signed.replace("/reset", "/resex")) is False
    
    def test_tampered_host_and_scheme(self, codec):
        signed = codec.sign("https://example.com/reset?id=42")
        
        assert codec.check(signed.replace("example.com", "example.org")) is False
        assert codec.check(signed.replace("https://", "http://")) is False
    
    def test_added_parameter(self, codec):
        signed = codec.sign("https://example.com/reset?id=42")
        
        assert codec.check(signed.replace("?id=42", "?id=42&admin=1")) is False
    
    def test_reordered_query_is_rejected(self, codec):
        """The raw query is checked as received, never re-sorted."""
        signed = codec.sign("https://example.com/a?x=1&y=2")
        signature = signed.split("&_hash=", 1)[1]
        
        reordered = f"https://example.com/a?y=2&x=1&_hash={signature}"
        
        assert codec.check(reordered) is False
    
    def test_signature_position_is_irrelevant(self, codec):
        """Only the other pairs' order matters, not where the signature sits."""
        signed = codec.sign("https://example.com/a?x=1&y=2")
        signature = signed.split("&_hash=", 1)[1]
        
        assert codec.check(f"https://example.com/a?_hash={signature}&x=1&y=2")
    
    def test_wrong_secret(self, codec):
        """A URL signed with another secret should not check."""
        signed = SignatureCodec("other-secret").sign("https://example.com/reset?id=42")
        
        assert codec.check(signed) is False
    
    def test_missing_signature(self, codec):
        assert codec.check("https://example.com/reset?id=42") is False
        assert codec.check("https://example.com/reset") is False
    
    def test_empty_signature(self, codec):
        assert codec.check("https://example.com/reset?id=42&_hash=") is False
    
    def test_duplicated_signature(self, codec):
        signed = codec.sign("https://example.com/reset?id=42")
        signature = signed.split("&_hash=", 1)[1]
        
        assert codec.check(f"{signed}&_hash={signature}") is False
    
    def test_malformed_signature_does_not_raise(self, codec):
        """Garbage and non-ASCII digests are mismatches, not errors."""
        assert codec.check("https://example.com/a?_hash=%ZZ%ZZ") is False
        assert codec.check("https://example.com/a?_hash=%C3%A9t%C3%A9") is False
        assert codec.check("https://example.com/a?_hash=not base64!") is False
    
    def test_check_request_parts(self, codec):
        """Parsed request parts check the same as the raw URL."""
        signed = codec.sign("https://example.com/reset?id=42")
        
        assert codec.check(RequestParts.from_url(signed)) is True
    
    def test_empty_query_segments_are_signed(self, codec):
        """Empty segments are part of the raw query and are not collapsed."""
        signed = codec.sign("https://example.com/a?a=1&&b=2")
        
        assert signed.startswith("https://example.com/a?a=1&&b=2&_hash=")
        assert codec.check(signed)
        assert codec.check(signed.replace("a=1&&b=2", "a=1&b=2")) is False
    
    def test_trailing_ampersand_round_trip(self, codec):
        assert codec.check(codec.sign("https://example.com/a?a=1&"))


class TestHash:
    """Tests for single-use token digests."""
    
    def test_hash_literal_token(self, codec):
        """Digest is base64(HMAC-SHA256(secret, token))."""
        assert codec.hash("hash_v1") == expected_digest(SECRET, "hash_v1")
    
    def test_hash_is_stable(self, codec):
        assert codec.hash("hash_v1") == codec.hash("hash_v1")
        assert codec.hash("hash_v1") != codec.hash("hash_v2")
    
    def test_hash_depends_on_secret(self, codec):
        assert codec.hash("hash_v1") != SignatureCodec("other").hash("hash_v1")
    
    def test_hash_producer_called_once(self, codec):
        """A producer is evaluated exactly once per hash call."""
        calls = []
        
        def producer():
            calls.append(1)
            return "hash_v1"
        
        assert codec.hash(producer) == codec.hash("hash_v1")
        assert len(calls) == 1
    
    def test_normalize_token(self):
        assert normalize_token("abc") == "abc"
        assert normalize_token(lambda: "abc") == "abc"
    
    def test_bytes_token_is_normalized(self, codec):
        """A bytes token, e.g. a bcrypt hash, hashes as its text."""
        assert codec.hash(lambda: b"$2b$12$abc") == codec.hash("$2b$12$abc")
        assert codec.hash(b"$2b$12$abc") == codec.hash("$2b$12$abc")
    
    def test_non_utf8_bytes_token(self, codec):
        """Undecodable bytes still hash, and hash as the raw bytes."""
        raw = b"\xff\xfe-token"
        mac = hmac.new(SECRET.encode(), raw, hashlib.sha256).digest()
        
        assert codec.hash(raw) == base64.b64encode(mac).decode()
    
    def test_other_token_types_use_str(self, codec):
        assert codec.hash(lambda: 42) == codec.hash("42")
        assert normalize_token(lambda: 42) == "42"


class TestCodecSecret:
    """Tests for secret handling."""
    
    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            SignatureCodec("")
    
    def test_bytes_secret(self):
        signed = SignatureCodec(b"S3CRET").sign("https://example.com/a")
        
        assert SignatureCodec("S3CRET").check(signed)
    
    def test_repr_hides_secret(self, codec):
        assert SECRET not in repr(codec)


class TestRequestParts:
    """Tests for request canonicalization."""
    
    def test_from_url(self):
        parts = RequestParts.from_url("https://example.com:8443/a/b?y=2&x=1#frag")
        
        assert parts.scheme == "https"
        assert parts.host == "example.com:8443"
        assert parts.path == "/a/b"
        assert parts.query_string == "y=2&x=1"
        assert parts.canonical() == "https://example.com:8443/a/b?y=2&x=1"
    
    def test_from_scope_uses_raw_path_and_query(self):
        """ASGI requests canonicalize from the raw bytes received."""
        scope = {
            "type": "http",
            "scheme": "https",
            "path": "/café",
            "raw_path": b"/caf%C3%A9",
            "root_path": "",
            "query_string": b"b=2&a=1",
            "headers": [(b"host", b"example.com")],
        }
        
        parts = RequestParts.from_scope(scope)
        
        assert parts.canonical() == "https://example.com/caf%C3%A9?b=2&a=1"
    
    def test_from_scope_without_raw_path(self):
        scope = {
            "type": "http",
            "scheme": "http",
            "path": "/reset",
            "root_path": "/app",
            "query_string": b"id=42",
            "headers": [],
            "server": ("testserver", 8000),
        }
        
        parts = RequestParts.from_scope(scope)
        
        assert parts.canonical() == "http://testserver:8000/app/reset?id=42"
    
    def test_relative_canonical(self):
        assert RequestParts.from_url("/a?x=1").canonical() == "/a?x=1"


class TestQueryHelpers:
    """Tests for raw query manipulation."""
    
    def test_extract_keeps_order_and_encoding(self):
        values, remaining = extract_param("b=%2F&_hash=abc&a=1", "_hash")
        
        assert values == ["abc"]
        assert remaining == "b=%2F&a=1"
    
    def test_get_param_decodes_last_value(self):
        assert get_param("_token=a%2Bb%3D&_token=c", "_token") == "c"
        assert get_param("_token=a%2Bb%3D", "_token") == "a+b="
        assert get_param("x=1", "_token") is None
    
    def test_append_param_encodes(self):
        assert append_param("", "_token", "a+b/c=") == "_token=a%2Bb%2Fc%3D"
        assert append_param("x=1", "k", "v") == "x=1&k=v"
    
    def test_extract_keeps_empty_segments(self):
        values, remaining = extract_param("a=1&&_hash=abc&b=2", "_hash")
        
        assert values == ["abc"]
        assert remaining == "a=1&&b=2"
