"""Provider names and file extensions understood by the built-in providers."""

JSON_PROVIDER_NAME = "JSON"
XML_PROVIDER_NAME = "XML"
YAML_PROVIDER_NAME = "YAML"
MEMORY_PROVIDER_NAME = "MEMORY"
ENVIRONMENT_PROVIDER_NAME = "ENV"

JSON_EXTENSION = ".json"
XML_EXTENSION = ".xml"
YAML_EXTENSIONS = (".yaml", ".yml")

MEMORY_SCHEME = "memory://"
ENVIRONMENT_SCHEME = "env://"

# JSON integers outside this range are stored as floats
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
