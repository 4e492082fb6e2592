"""Constants for the AWS PCA Issuer Operator."""

# API Group
API_GROUP = "awspca.cert-manager.io"
API_VERSION = "v1beta1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_ISSUER = "AWSPCAIssuer"
KIND_CLUSTER_ISSUER = "AWSPCAClusterIssuer"

# Resource Plurals
PLURAL_ISSUER = "awspcaissuers"
PLURAL_CLUSTER_ISSUER = "awspcaclusterissuers"

# Controller name used in logs and as the AWS user agent
CONTROLLER_NAME = "aws-privateca-issuer"

# Session name for sts:AssumeRole
ROLE_SESSION_NAME = "aws-privateca-issuer"

# Default keys read from a credentials secret
DEFAULT_ACCESS_KEY_ID_KEY = "AWS_ACCESS_KEY_ID"
DEFAULT_SECRET_ACCESS_KEY_KEY = "AWS_SECRET_ACCESS_KEY"

# Condition Types
COND_READY = "Ready"

# Condition Statuses
STATUS_TRUE = "True"
STATUS_FALSE = "False"

# Condition / Event Reasons
REASON_VALIDATION = "Validation"
REASON_ERROR = "Error"
REASON_VERIFIED = "Verified"

# Event Types
EVENT_TYPE_NORMAL = "Normal"
EVENT_TYPE_WARNING = "Warning"

# Messages
MESSAGE_VERIFIED = "Issuer verified"
MESSAGE_VALIDATION_FAILED = "Failed to validate resource: {error}"
