# Import all models here so create_all sees every table
from app.db.session import Base

from app.modules.user_management.models.user import User
from app.modules.auth.models.session import UserSession
from app.modules.posts.models.post import Post, post_categories
from app.modules.posts.categories.models.category import Category
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.reactions.models.reaction import Reaction
