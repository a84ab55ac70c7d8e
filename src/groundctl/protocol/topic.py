""" Topic naming for publish/subscribe. The topic for a message is a pure
    function of its type name: a fixed namespace prefix, a dot, and the type
    name. The same namespace must be used when publishing a message type
    and when subscribing to it, otherwise the subscriber never sees it.
"""

DEFAULT_NAMESPACE = 'afrl.cmasi'


def topic_for(message, namespace=DEFAULT_NAMESPACE):
    """ Return the topic for *message*, which can be either a
        :class:`groundctl.protocol.message.Message` instance or a
        message class.
    """

    if not namespace:
        raise ValueError('topic namespace cannot be empty')

    return namespace + '.' + message.type_name()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
