"""microsvc-template -- scaffold Node.js microservices for AWS."""

__version__ = "0.1.0"
