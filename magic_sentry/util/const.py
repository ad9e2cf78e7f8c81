VERSION = '0.1.0'
SDK_NAME = 'magic-sentry'
USER_AGENT = f'magic-sentry/{VERSION} (python; +https://pypi.org/project/magic-sentry/)'

# Option classes used by the configuration fragments. These never reach the
# packet; they are only read back when a client resolves its config.
OPTION_CLASS_DSN = 'magic-sentry.dsn'
OPTION_CLASS_TRANSPORT = 'magic-sentry.transport'
OPTION_CLASS_SEND_QUEUE = 'magic-sentry.sendqueue'

CONFIG_OPTION_CLASSES = frozenset({
    OPTION_CLASS_DSN,
    OPTION_CLASS_TRANSPORT,
    OPTION_CLASS_SEND_QUEUE,
})

# Event payload option classes
OPTION_CLASS_EVENT_ID = 'event_id'
OPTION_CLASS_MESSAGE = 'sentry.interfaces.Message'

DEFAULT_SEND_QUEUE_SIZE = 100

# Packets smaller than this are sent as plain JSON, larger ones are
# deflated and base64 encoded.
COMPRESSION_THRESHOLD = 1000

SENTRY_PROTOCOL_VERSION = 4

ENV_DSN = 'SENTRY_DSN'
ENV_RELEASE = 'SENTRY_RELEASE'
ENV_ENVIRONMENT = ('ENV', 'ENVIRONMENT')
