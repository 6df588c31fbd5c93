class PostNotFoundError(Exception):
    """Raised when no post exists for the requested id"""

    def __init__(self, post_id: int):
        self.post_id = post_id
        super().__init__(f"Post not found with id: {post_id}")
