"""
In-memory content storage for the site back-office.

All records live in process memory behind a single lock. Each collection keeps its
own id counter, starting at 1, like a serial primary key would.

Projects, services and blog posts each own a gallery. Gallery methods take an
``owner`` argument naming which of the three the owner id refers to.
"""

from __future__ import annotations
from dataclasses import replace, fields
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from itertools import count
import threading
import logging

from .types import (
    Project, Message, Testimonial, QuoteRequest, QuoteAttachment,
    NewsletterSubscriber, Service, BlogPost, JobPosting, TeamMember,
    SiteSetting, Application, QUOTE_STATUSES, APPLICATION_STATUSES, APPLICATION_KINDS,
)
from .gallery.types import GalleryImage
from .gallery import reorder as gallery_ops
from .errors import NotFoundError, GalleryError, DuplicateError

logger = logging.getLogger(__name__)

GALLERY_OWNERS = {"project": "Project", "service": "Service", "blog": "Blog post"}
COVER_OWNERS = ("project", "blog")  # owners whose record carries an `image` cover


def _apply(record, changes: Dict[str, Any]):
    allowed = {f.name for f in fields(record)} - {"id", "created_at"}
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Unknown fields for {type(record).__name__}: {sorted(unknown)}")
    return replace(record, **changes)


class ContentStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._projects: Dict[int, Project] = {}
        self._services: Dict[int, Service] = {}
        self._posts: Dict[int, BlogPost] = {}
        self._owners = {"project": self._projects, "service": self._services, "blog": self._posts}
        self._galleries: Dict[str, Dict[int, List[GalleryImage]]] = {owner: {} for owner in GALLERY_OWNERS}
        self._messages: Dict[int, Message] = {}
        self._testimonials: Dict[int, Testimonial] = {}
        self._quotes: Dict[int, QuoteRequest] = {}
        self._subscribers: Dict[int, NewsletterSubscriber] = {}
        self._jobs: Dict[int, JobPosting] = {}
        self._team: Dict[int, TeamMember] = {}
        self._settings: Dict[int, SiteSetting] = {}
        self._applications: Dict[str, Dict[int, Application]] = {kind: {} for kind in APPLICATION_KINDS}
        names = [
            "message", "testimonial", "quote", "attachment", "subscriber",
            "job", "team", "setting", *GALLERY_OWNERS, *APPLICATION_KINDS,
        ]
        names += [f"{owner}_gallery" for owner in GALLERY_OWNERS]
        self._ids = {name: count(1) for name in names}

    def _next_id(self, name: str) -> int:
        return next(self._ids[name])

    # Gallery owners
    def _get_owner(self, owner: str, owner_id: int):
        record = self._owners[owner].get(owner_id)
        if record is None:
            raise NotFoundError(f"{GALLERY_OWNERS[owner]} {owner_id} not found")
        return record

    def _create_owner(self, owner: str, record_type, **data):
        with self._lock:
            record = record_type(id=self._next_id(owner), **data)
            self._owners[owner][record.id] = record
            self._galleries[owner][record.id] = []
        logger.info(f"Created {GALLERY_OWNERS[owner].lower()} {record.id}: {record.title}")
        return record

    def _delete_owner(self, owner: str, owner_id: int) -> List[GalleryImage]:
        with self._lock:
            self._get_owner(owner, owner_id)
            del self._owners[owner][owner_id]
            removed = self._galleries[owner].pop(owner_id, [])
        logger.info(f"Deleted {GALLERY_OWNERS[owner].lower()} {owner_id} with {len(removed)} gallery images")
        return removed

    def _set_cover(self, owner: str, owner_id: int, url: str) -> None:
        if owner not in COVER_OWNERS:
            return
        records = self._owners[owner]
        records[owner_id] = replace(records[owner_id], image=url)

    def _cover_follows_feature(self, owner: str, owner_id: int, images: List[GalleryImage]) -> None:
        feature = gallery_ops.feature_image(images)
        if feature is not None and feature.image_url:
            self._set_cover(owner, owner_id, feature.image_url)

    def _release_cover(self, owner: str, owner_id: int, removed: Iterable[GalleryImage], remaining: List[GalleryImage]) -> None:
        """Point the cover away from removed images, so their files can be released."""
        if owner not in COVER_OWNERS:
            return
        cover = self._owners[owner][owner_id].image
        if cover not in {img.image_url for img in removed}:
            return
        fallback = next((img.image_url for img in remaining if img.image_url), "")
        self._set_cover(owner, owner_id, fallback)

    # Projects
    def list_projects(self) -> List[Project]:
        with self._lock:
            return sorted(self._projects.values(), key=lambda p: p.id)

    def featured_projects(self) -> List[Project]:
        return [p for p in self.list_projects() if p.featured]

    def get_project(self, project_id: int) -> Project:
        with self._lock:
            return self._get_owner("project", project_id)

    def create_project(self, **data) -> Project:
        return self._create_owner("project", Project, **data)

    def update_project(self, project_id: int, **changes) -> Project:
        with self._lock:
            project = _apply(self._get_owner("project", project_id), changes)
            self._projects[project_id] = project
            return project

    def delete_project(self, project_id: int) -> List[GalleryImage]:
        """Delete a project and its gallery, returning the removed gallery images."""
        return self._delete_owner("project", project_id)

    # Services
    def list_services(self) -> List[Service]:
        with self._lock:
            return sorted(self._services.values(), key=lambda s: s.id)

    def get_service(self, service_id: int) -> Service:
        with self._lock:
            return self._get_owner("service", service_id)

    def create_service(self, **data) -> Service:
        return self._create_owner("service", Service, **data)

    def update_service(self, service_id: int, **changes) -> Service:
        with self._lock:
            service = _apply(self._get_owner("service", service_id), changes)
            self._services[service_id] = service
            return service

    def delete_service(self, service_id: int) -> List[GalleryImage]:
        return self._delete_owner("service", service_id)

    # Blog posts
    def list_blog_posts(self, published_only: bool = False) -> List[BlogPost]:
        with self._lock:
            posts = sorted(self._posts.values(), key=lambda p: (p.created_at, p.id), reverse=True)
        return [p for p in posts if p.published] if published_only else posts

    def get_blog_post(self, post_id: int) -> BlogPost:
        with self._lock:
            return self._get_owner("blog", post_id)

    def get_blog_post_by_slug(self, slug: str) -> BlogPost:
        with self._lock:
            post = next((p for p in self._posts.values() if p.slug == slug), None)
        if post is None:
            raise NotFoundError(f"Blog post '{slug}' not found")
        return post

    def _check_slug(self, slug: str, post_id: Optional[int] = None) -> None:
        for post in self._posts.values():
            if post.slug == slug and post.id != post_id:
                raise DuplicateError(f"Slug '{slug}' is already used by blog post {post.id}")

    def create_blog_post(self, **data) -> BlogPost:
        with self._lock:
            self._check_slug(data["slug"])
        return self._create_owner("blog", BlogPost, **data)

    def update_blog_post(self, post_id: int, **changes) -> BlogPost:
        with self._lock:
            post = self._get_owner("blog", post_id)
            if "slug" in changes:
                self._check_slug(changes["slug"], post_id)
            post = _apply(post, changes)
            self._posts[post_id] = post
            return post

    def delete_blog_post(self, post_id: int) -> List[GalleryImage]:
        return self._delete_owner("blog", post_id)

    # Galleries
    def get_gallery(self, owner_id: int, owner: str = "project") -> List[GalleryImage]:
        with self._lock:
            self._get_owner(owner, owner_id)
            return list(self._galleries[owner].get(owner_id, []))

    def _find_image(self, owner: str, image_id: int) -> GalleryImage:
        for images in self._galleries[owner].values():
            for img in images:
                if img.id == image_id:
                    return img
        raise NotFoundError(f"{GALLERY_OWNERS[owner]} gallery image {image_id} not found")

    def get_gallery_image(self, image_id: int, owner: str = "project") -> GalleryImage:
        with self._lock:
            return self._find_image(owner, image_id)

    def add_gallery_image(
        self,
        owner_id: int,
        image_url: str,
        caption: str = "",
        display_order: Optional[int] = None,
        is_feature: bool = False,
        owner: str = "project",
    ) -> GalleryImage:
        with self._lock:
            self._get_owner(owner, owner_id)
            galleries = self._galleries[owner]
            images = galleries.setdefault(owner_id, [])
            image = GalleryImage(
                id=self._next_id(f"{owner}_gallery"),
                image_url=image_url,
                caption=caption,
                display_order=len(images) + 1,
                owner_id=owner_id,
            )
            images = images + [image]
            if display_order is not None:
                target = min(max(display_order, 1), len(images)) - 1
                images = gallery_ops.move(images, len(images) - 1, target)
            if is_feature:
                images = gallery_ops.set_feature(images, image.id)
                self._cover_follows_feature(owner, owner_id, images)
            galleries[owner_id] = images
            return images[gallery_ops.index_of(images, image.id)]

    def update_gallery_image(
        self,
        image_id: int,
        caption: Optional[str] = None,
        display_order: Optional[int] = None,
        owner: str = "project",
    ) -> GalleryImage:
        with self._lock:
            image = self._find_image(owner, image_id)
            galleries = self._galleries[owner]
            images = galleries[image.owner_id]
            if caption is not None:
                images = [replace(img, caption=caption) if img.id == image_id else img for img in images]
            if display_order is not None:
                old_index = gallery_ops.index_of(images, image_id)
                target = min(max(display_order, 1), len(images)) - 1
                images = gallery_ops.move(images, old_index, target)
            galleries[image.owner_id] = images
            return images[gallery_ops.index_of(images, image_id)]

    def set_feature_image(self, owner_id: int, image_id: int, owner: str = "project") -> GalleryImage:
        with self._lock:
            self._get_owner(owner, owner_id)
            images = self._galleries[owner].get(owner_id, [])
            try:
                images = gallery_ops.set_feature(images, image_id)
            except GalleryError as e:
                raise NotFoundError(
                    f"Gallery image {image_id} does not belong to {GALLERY_OWNERS[owner].lower()} {owner_id}"
                ) from e
            self._galleries[owner][owner_id] = images
            self._cover_follows_feature(owner, owner_id, images)
            return gallery_ops.feature_image(images)

    def delete_gallery_image(self, image_id: int, owner: str = "project") -> GalleryImage:
        with self._lock:
            image = self._find_image(owner, image_id)
            remaining = gallery_ops.remove(self._galleries[owner][image.owner_id], image_id)
            self._galleries[owner][image.owner_id] = remaining
            self._release_cover(owner, image.owner_id, [image], remaining)
            return image

    def apply_gallery_order(self, owner_id: int, order: Dict[int, int], owner: str = "project") -> List[GalleryImage]:
        """Persist a client-supplied ordering, given as image id -> display order."""
        with self._lock:
            self._get_owner(owner, owner_id)
            images = self._galleries[owner].get(owner_id, [])
            position = {img.id: index for index, img in enumerate(images)}
            unknown = set(order) - set(position)
            if unknown:
                raise NotFoundError(
                    f"Gallery images {sorted(unknown)} do not belong to {GALLERY_OWNERS[owner].lower()} {owner_id}"
                )

            # listed images first by their submitted order, the rest after them as they were
            def sort_key(img: GalleryImage) -> Tuple[int, int, int]:
                if img.id in order:
                    return (0, order[img.id], position[img.id])
                return (1, position[img.id], 0)

            images = gallery_ops.renumber(sorted(images, key=sort_key))
            self._galleries[owner][owner_id] = images
            return list(images)

    def replace_gallery(self, owner_id: int, images: Iterable[GalleryImage], owner: str = "project") -> List[GalleryImage]:
        with self._lock:
            self._get_owner(owner, owner_id)
            self._galleries[owner][owner_id] = gallery_ops.renumber(list(images))
            return list(self._galleries[owner][owner_id])

    def sync_gallery(
        self,
        owner_id: int,
        items: Iterable[Dict[str, Any]],
        owner: str = "project",
        promote_first: bool = False,
    ) -> Tuple[List[GalleryImage], List[GalleryImage]]:
        """
        Make an owner's gallery match an edited list in one step.

        Each item is matched to a stored image by ``id``, then by ``image_url``;
        unmatched items with a URL become new images. Stored images nothing matched
        are dropped. List position becomes display order. The first item flagged
        ``is_feature`` wins; with none flagged and ``promote_first`` set, the first
        image becomes the feature image.

        Returns the new gallery and the dropped images.
        """
        with self._lock:
            self._get_owner(owner, owner_id)
            current = self._galleries[owner].get(owner_id, [])
            by_id = {img.id: img for img in current}
            by_url = {img.image_url: img for img in current if img.image_url}

            kept, images = set(), []
            for item in items:
                caption = item.get("caption") or ""
                existing = by_id.get(item.get("id")) or by_url.get(item.get("image_url"))
                if existing is not None and existing.id not in kept:
                    kept.add(existing.id)
                    images.append(replace(existing, caption=caption, is_feature=bool(item.get("is_feature"))))
                elif item.get("image_url"):
                    images.append(GalleryImage(
                        id=self._next_id(f"{owner}_gallery"),
                        image_url=item["image_url"],
                        caption=caption,
                        is_feature=bool(item.get("is_feature")),
                        owner_id=owner_id,
                    ))

            images = gallery_ops.renumber(images)
            flagged = gallery_ops.feature_image(images)
            if flagged is not None:
                images = gallery_ops.set_feature(images, flagged.id)
            elif promote_first and images:
                images = gallery_ops.set_feature(images, images[0].id)

            removed = [img for img in current if img.id not in kept]
            self._galleries[owner][owner_id] = images
            self._release_cover(owner, owner_id, removed, images)
            self._cover_follows_feature(owner, owner_id, images)

        logger.info(
            f"Synced {GALLERY_OWNERS[owner].lower()} {owner_id} gallery: "
            f"{len(images)} images, {len(removed)} removed"
        )
        return list(images), removed

    def referenced_urls(self) -> set:
        """Every file URL still referenced by a stored record."""
        with self._lock:
            urls = {p.image for p in self._projects.values() if p.image}
            urls.update(p.image for p in self._posts.values() if p.image)
            for galleries in self._galleries.values():
                for images in galleries.values():
                    urls.update(img.image_url for img in images if img.image_url)
            for quote in self._quotes.values():
                urls.update(a.file_url for a in quote.attachments)
            urls.update(t.image for t in self._testimonials.values() if t.image)
            urls.update(m.photo for m in self._team.values() if m.photo)
            return urls

    # Messages
    def list_messages(self) -> List[Message]:
        with self._lock:
            return sorted(self._messages.values(), key=lambda m: m.created_at, reverse=True)

    def create_message(self, **data) -> Message:
        with self._lock:
            message = Message(id=self._next_id("message"), **data)
            self._messages[message.id] = message
            return message

    def mark_message_read(self, message_id: int) -> Message:
        with self._lock:
            message = self._messages.get(message_id)
            if message is None:
                raise NotFoundError(f"Message {message_id} not found")
            message = replace(message, read=True)
            self._messages[message_id] = message
            return message

    def delete_message(self, message_id: int) -> None:
        with self._lock:
            if self._messages.pop(message_id, None) is None:
                raise NotFoundError(f"Message {message_id} not found")

    # Testimonials
    def list_testimonials(self, approved: Optional[bool] = None) -> List[Testimonial]:
        with self._lock:
            items = sorted(self._testimonials.values(), key=lambda t: t.id)
        if approved is None:
            return items
        return [t for t in items if t.approved == approved]

    def get_testimonial(self, testimonial_id: int) -> Testimonial:
        with self._lock:
            testimonial = self._testimonials.get(testimonial_id)
        if testimonial is None:
            raise NotFoundError(f"Testimonial {testimonial_id} not found")
        return testimonial

    def create_testimonial(self, **data) -> Testimonial:
        with self._lock:
            testimonial = Testimonial(id=self._next_id("testimonial"), **data)
            self._testimonials[testimonial.id] = testimonial
            return testimonial

    def update_testimonial(self, testimonial_id: int, **changes) -> Testimonial:
        with self._lock:
            testimonial = self._testimonials.get(testimonial_id)
            if testimonial is None:
                raise NotFoundError(f"Testimonial {testimonial_id} not found")
            testimonial = _apply(testimonial, changes)
            self._testimonials[testimonial_id] = testimonial
            return testimonial

    def set_testimonial_approval(self, testimonial_id: int, approved: bool) -> Testimonial:
        return self.update_testimonial(testimonial_id, approved=approved)

    def delete_testimonial(self, testimonial_id: int) -> Testimonial:
        with self._lock:
            testimonial = self._testimonials.pop(testimonial_id, None)
        if testimonial is None:
            raise NotFoundError(f"Testimonial {testimonial_id} not found")
        return testimonial

    # Quote requests
    def list_quote_requests(self) -> List[QuoteRequest]:
        with self._lock:
            return sorted(self._quotes.values(), key=lambda q: q.created_at, reverse=True)

    def _get_quote(self, quote_id: int) -> QuoteRequest:
        quote = self._quotes.get(quote_id)
        if quote is None:
            raise NotFoundError(f"Quote request {quote_id} not found")
        return quote

    def get_quote_request(self, quote_id: int) -> QuoteRequest:
        with self._lock:
            return self._get_quote(quote_id)

    def create_quote_request(self, **data) -> QuoteRequest:
        with self._lock:
            quote = QuoteRequest(id=self._next_id("quote"), **data)
            self._quotes[quote.id] = quote
            return quote

    def add_quote_attachment(self, quote_id: int, **data) -> QuoteAttachment:
        with self._lock:
            quote = self._get_quote(quote_id)
            attachment = QuoteAttachment(id=self._next_id("attachment"), quote_request_id=quote_id, **data)
            quote.attachments.append(attachment)
            return attachment

    def update_quote_status(self, quote_id: int, status: str) -> QuoteRequest:
        if status not in QUOTE_STATUSES:
            raise ValueError(f"Invalid status '{status}'. Valid values: {', '.join(QUOTE_STATUSES)}")
        with self._lock:
            quote = replace(self._get_quote(quote_id), status=status)
            self._quotes[quote_id] = quote
            return quote

    def mark_quote_reviewed(self, quote_id: int) -> QuoteRequest:
        with self._lock:
            quote = replace(self._get_quote(quote_id), reviewed=True)
            self._quotes[quote_id] = quote
            return quote

    def delete_quote_request(self, quote_id: int) -> QuoteRequest:
        with self._lock:
            quote = self._get_quote(quote_id)
            del self._quotes[quote_id]
            return quote

    def delete_quote_attachment(self, attachment_id: int) -> QuoteAttachment:
        with self._lock:
            for quote in self._quotes.values():
                for attachment in quote.attachments:
                    if attachment.id == attachment_id:
                        quote.attachments.remove(attachment)
                        return attachment
        raise NotFoundError(f"Attachment {attachment_id} not found")

    # Newsletter
    def list_subscribers(self) -> List[NewsletterSubscriber]:
        with self._lock:
            return sorted(self._subscribers.values(), key=lambda s: s.id)

    def find_subscriber(self, email: str) -> Optional[NewsletterSubscriber]:
        needle = email.strip().lower()
        with self._lock:
            return next((s for s in self._subscribers.values() if s.email.lower() == needle), None)

    def create_subscriber(self, **data) -> NewsletterSubscriber:
        with self._lock:
            subscriber = NewsletterSubscriber(id=self._next_id("subscriber"), **data)
            self._subscribers[subscriber.id] = subscriber
            return subscriber

    def set_subscription(self, subscriber_id: int, subscribed: bool) -> NewsletterSubscriber:
        with self._lock:
            subscriber = self._subscribers.get(subscriber_id)
            if subscriber is None:
                raise NotFoundError(f"Subscriber {subscriber_id} not found")
            subscriber = replace(subscriber, subscribed=subscribed)
            self._subscribers[subscriber_id] = subscriber
            return subscriber

    def delete_subscriber(self, subscriber_id: int) -> None:
        with self._lock:
            if self._subscribers.pop(subscriber_id, None) is None:
                raise NotFoundError(f"Subscriber {subscriber_id} not found")

    # Careers
    def list_job_postings(self, active: Optional[bool] = None, featured: Optional[bool] = None) -> List[JobPosting]:
        with self._lock:
            jobs = sorted(self._jobs.values(), key=lambda j: (j.created_at, j.id), reverse=True)
        if active is not None:
            jobs = [j for j in jobs if j.active == active]
        if featured is not None:
            jobs = [j for j in jobs if j.featured == featured]
        return jobs

    def _get_job(self, job_id: int) -> JobPosting:
        job = self._jobs.get(job_id)
        if job is None:
            raise NotFoundError(f"Job posting {job_id} not found")
        return job

    def get_job_posting(self, job_id: int) -> JobPosting:
        with self._lock:
            return self._get_job(job_id)

    def create_job_posting(self, **data) -> JobPosting:
        with self._lock:
            job = JobPosting(id=self._next_id("job"), **data)
            self._jobs[job.id] = job
            return job

    def update_job_posting(self, job_id: int, **changes) -> JobPosting:
        with self._lock:
            job = _apply(self._get_job(job_id), changes)
            self._jobs[job_id] = job
            return job

    def toggle_job_posting(self, job_id: int, flag: str) -> JobPosting:
        """Flip the ``active`` or ``featured`` flag of a job posting."""
        if flag not in ("active", "featured"):
            raise ValueError(f"Cannot toggle '{flag}' on a job posting")
        with self._lock:
            job = self._get_job(job_id)
            job = replace(job, **{flag: not getattr(job, flag)})
            self._jobs[job_id] = job
            return job

    def delete_job_posting(self, job_id: int) -> JobPosting:
        with self._lock:
            job = self._get_job(job_id)
            del self._jobs[job_id]
            return job

    # Team members
    def list_team_members(self, active_only: bool = False) -> List[TeamMember]:
        with self._lock:
            members = sorted(self._team.values(), key=lambda m: (m.order, m.id))
        return [m for m in members if m.active] if active_only else members

    def _get_member(self, member_id: int) -> TeamMember:
        member = self._team.get(member_id)
        if member is None:
            raise NotFoundError(f"Team member {member_id} not found")
        return member

    def get_team_member(self, member_id: int) -> TeamMember:
        with self._lock:
            return self._get_member(member_id)

    def create_team_member(self, order: Optional[int] = None, **data) -> TeamMember:
        with self._lock:
            if order is None:
                order = max((m.order for m in self._team.values()), default=0) + 1
            member = TeamMember(id=self._next_id("team"), order=order, **data)
            self._team[member.id] = member
            return member

    def update_team_member(self, member_id: int, **changes) -> TeamMember:
        with self._lock:
            member = _apply(self._get_member(member_id), changes)
            self._team[member_id] = member
            return member

    def toggle_team_member_active(self, member_id: int) -> TeamMember:
        with self._lock:
            member = self._get_member(member_id)
            member = replace(member, active=not member.active)
            self._team[member_id] = member
            return member

    def set_team_member_order(self, member_id: int, order: int) -> TeamMember:
        return self.update_team_member(member_id, order=order)

    def delete_team_member(self, member_id: int) -> TeamMember:
        with self._lock:
            member = self._get_member(member_id)
            del self._team[member_id]
            return member

    # Site settings
    def list_site_settings(self, category: Optional[str] = None) -> List[SiteSetting]:
        with self._lock:
            settings = sorted(self._settings.values(), key=lambda s: (s.category, s.key))
        return [s for s in settings if s.category == category] if category else settings

    def get_site_setting(self, key: str) -> SiteSetting:
        with self._lock:
            return self._setting_by_key(key)

    def _setting_by_key(self, key: str) -> SiteSetting:
        setting = next((s for s in self._settings.values() if s.key == key), None)
        if setting is None:
            raise NotFoundError(f"Setting with key '{key}' not found")
        return setting

    def _check_key(self, key: str, setting_id: Optional[int] = None) -> None:
        for setting in self._settings.values():
            if setting.key == key and setting.id != setting_id:
                raise DuplicateError(f"Setting with key '{key}' already exists")

    def create_site_setting(self, **data) -> SiteSetting:
        with self._lock:
            self._check_key(data["key"])
            setting = SiteSetting(id=self._next_id("setting"), **data)
            self._settings[setting.id] = setting
            return setting

    def update_site_setting(self, setting_id: int, **changes) -> SiteSetting:
        with self._lock:
            setting = self._settings.get(setting_id)
            if setting is None:
                raise NotFoundError(f"Setting {setting_id} not found")
            if "key" in changes:
                self._check_key(changes["key"], setting_id)
            setting = replace(_apply(setting, changes), updated_at=datetime.utcnow())
            self._settings[setting_id] = setting
            return setting

    def set_site_setting_value(self, key: str, value: Optional[str]) -> SiteSetting:
        with self._lock:
            setting = self._setting_by_key(key)
        return self.update_site_setting(setting.id, value=value)

    def delete_site_setting(self, setting_id: int) -> SiteSetting:
        with self._lock:
            setting = self._settings.pop(setting_id, None)
        if setting is None:
            raise NotFoundError(f"Setting {setting_id} not found")
        return setting

    # Subcontractor and vendor applications
    def list_applications(self, kind: str) -> List[Application]:
        with self._lock:
            return sorted(self._applications[kind].values(), key=lambda a: (a.created_at, a.id), reverse=True)

    def _get_application(self, kind: str, application_id: int) -> Application:
        application = self._applications[kind].get(application_id)
        if application is None:
            raise NotFoundError(f"{kind.capitalize()} application {application_id} not found")
        return application

    def get_application(self, kind: str, application_id: int) -> Application:
        with self._lock:
            return self._get_application(kind, application_id)

    def create_application(self, kind: str, **data) -> Application:
        with self._lock:
            application = Application(id=self._next_id(kind), kind=kind, **data)
            self._applications[kind][application.id] = application
            return application

    def update_application(self, kind: str, application_id: int, **changes) -> Application:
        status = changes.get("status")
        if status is not None and status not in APPLICATION_STATUSES:
            raise ValueError(f"Invalid status '{status}'. Valid values: {', '.join(APPLICATION_STATUSES)}")
        with self._lock:
            application = _apply(self._get_application(kind, application_id), changes)
            self._applications[kind][application_id] = application
            return application

    def delete_application(self, kind: str, application_id: int) -> Application:
        with self._lock:
            application = self._get_application(kind, application_id)
            del self._applications[kind][application_id]
            return application

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "projects": len(self._projects),
                "services": len(self._services),
                "blog_posts": len(self._posts),
                "gallery_images": sum(
                    len(images) for galleries in self._galleries.values() for images in galleries.values()
                ),
                "messages": len(self._messages),
                "testimonials": len(self._testimonials),
                "quote_requests": len(self._quotes),
                "subscribers": len(self._subscribers),
                "job_postings": len(self._jobs),
                "team_members": len(self._team),
                "site_settings": len(self._settings),
                "applications": sum(len(apps) for apps in self._applications.values()),
            }
