"""go-bootstrap: generate a ready-to-run Go web project inside GOPATH."""

__version__ = "0.1.0"
