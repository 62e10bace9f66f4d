# content/models.py

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import IntegrityError, models, transaction
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from .fields import DocumentField
from .security_logger import SecurityLogger

# --- Post status values ---

STATUS_PUBLISHED = 'published'
STATUS_REVIEW = 'review'
STATUS_DRAFT = 'draft'

POST_LAYOUTS = [
    (1, 1),
    (1, 1, 1),
    (2, 1),
    (1, 2),
    (1, 2, 1),
]

EVENT_LAYOUTS = [
    (1, 1),
    (1, 1, 1),
]


# --- Users ---

class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        """Create a user identified by email. Password is hashed by Django."""
        if not email:
            raise ValueError(_("An email address is required"))
        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields['is_admin'] = True
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser):
    """
    A CMS user. The email is the login identity and the password the secret.

    The first user saved into an empty table becomes an admin (see save()).
    """
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    is_admin = models.BooleanField(
        default=False,
        help_text=_("Admins can grant or revoke admin rights of other users"),
    )
    # Set only on the user created through the bootstrap path; the partial
    # unique constraint below allows a single such row.
    is_first_admin = models.BooleanField(default=False, editable=False)
    is_active = models.BooleanField(default=True)
    bio = models.TextField(blank=True)
    linkedin = models.CharField(max_length=255, blank=True)
    github = models.CharField(max_length=255, blank=True)
    twitter = models.CharField(max_length=255, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['is_first_admin'],
                condition=Q(is_first_admin=True),
                name='content_user_single_first_admin',
            ),
        ]

    def __str__(self):
        return self.name or self.email

    # Every active user may use the admin site; finer rules live in access.py.
    @property
    def is_staff(self):
        return self.is_active

    def has_perm(self, perm, obj=None):
        return self.is_active

    def has_perms(self, perm_list, obj=None):
        return all(self.has_perm(perm, obj) for perm in perm_list)

    def has_module_perms(self, app_label):
        return self.is_active

    def save(self, *args, **kwargs):
        if self._state.adding and not type(self)._default_manager.using(kwargs.get('using')).exists():
            self._save_as_first_item(*args, **kwargs)
        else:
            super().save(*args, **kwargs)

    def _save_as_first_item(self, *args, **kwargs):
        requested_is_admin = self.is_admin
        self.is_admin = True
        self.is_first_admin = True
        try:
            with transaction.atomic(using=kwargs.get('using')):
                super().save(*args, **kwargs)
        except IntegrityError:
            # Lost the race only if the bootstrap slot is taken; other integrity errors propagate.
            self.is_admin = requested_is_admin
            self.is_first_admin = False
            if not type(self)._default_manager.using(kwargs.get('using')).filter(is_first_admin=True).exists():
                raise
            SecurityLogger.log_bootstrap_conflict(self.email)
            super().save(*args, **kwargs)
        else:
            SecurityLogger.log_bootstrap_admin(self.pk, self.email)


# --- Content ---

class Tag(models.Model):
    name = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Post(models.Model):
    """
    A blog post. The status is a plain label: any writer may move a post
    between draft, review and published at any time.
    """
    STATUS_CHOICES = [
        (STATUS_PUBLISHED, _('Published')),
        (STATUS_REVIEW, _('Under Review')),
        (STATUS_DRAFT, _('Draft')),
    ]

    title = models.CharField(max_length=255)
    thumbnail = models.ImageField(upload_to='posts/', blank=True)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_DRAFT)
    content = DocumentField(formatting=True, links=True, dividers=True, layouts=POST_LAYOUTS)
    publish_date = models.DateTimeField(null=True, blank=True)
    author = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='posts',
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name='posts')

    class Meta:
        ordering = ['-publish_date', 'title']

    def __str__(self):
        return self.title


class Event(models.Model):
    name = models.CharField(max_length=255)
    date = models.DateTimeField(null=True, blank=True)
    hosts = models.ManyToManyField(User, blank=True, related_name='events')
    about = models.TextField()
    talking_points = DocumentField(formatting=True, dividers=True, links=True, layouts=EVENT_LAYOUTS)
    thumbnail = models.ImageField(upload_to='events/', blank=True)

    class Meta:
        ordering = ['-date', 'name']

    def __str__(self):
        return self.name
