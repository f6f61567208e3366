"""bosh-bootstrap — interactive wizard that bootstraps a micro BOSH."""

__version__ = "0.1.0"
