import simpy


class MessageBroker:
    """
    Topic based publish-subscribe channel between the car and its observers.

    A message is queued on its topic pipe only once someone subscribed to
    that topic, and copied to the broadcast pipe only once a recorder asked
    for it. Messages nobody listens to are dropped, so an unobserved car
    does not accumulate them.
    """
    def __init__(self, env: simpy.Environment, verbose: bool = False):
        """
        Args:
            env (simpy.Environment): SimPy environment
            verbose (bool): Print every publish
        """
        self.env = env
        self.verbose = verbose
        self.topics = {}  # topic -> Store, created by subscribers
        self.broadcast_pipe = None

    def get_pipe(self, topic: str) -> simpy.Store:
        """
        Get or create the pipe (Store) for the specified topic
        """
        if topic not in self.topics:
            self.topics[topic] = simpy.Store(self.env)
        return self.topics[topic]

    def put(self, topic: str, message):
        """
        Publish a message. Pipes are unbounded, so callers outside a
        process may ignore the returned event.

        Returns:
            The put event of the topic pipe, or None if nobody subscribed.
        """
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")
        if self.broadcast_pipe is not None:
            self.broadcast_pipe.put({'topic': topic, 'message': message})
        pipe = self.topics.get(topic)
        if pipe is None:
            return None
        return pipe.put(message)

    def get(self, topic: str):
        """
        Wait to receive a message from the specified topic
        """
        return self.get_pipe(topic).get()

    def get_broadcast_pipe(self) -> simpy.Store:
        """Pipe receiving a copy of every message from now on."""
        if self.broadcast_pipe is None:
            self.broadcast_pipe = simpy.Store(self.env)
        return self.broadcast_pipe
