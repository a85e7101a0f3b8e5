from videohub.domains.tweets.schemas import TweetBase, TweetCreate, TweetUpdate, TweetResponse, TweetView

__all__ = ["TweetBase", "TweetCreate", "TweetUpdate", "TweetResponse", "TweetView"]
