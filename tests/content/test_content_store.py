import pytest

from src.content.store import ContentStore
from src.content.errors import DuplicateError, NotFoundError


@pytest.fixture
def store():
    return ContentStore()


@pytest.fixture
def project(store):
    return store.create_project(
        title="Riverside Offices",
        category="Commercial",
        description="Three storey office block",
        image="https://utfs.io/f/cover.jpg",
    )


def add_images(store, project_id, count):
    return [
        store.add_gallery_image(project_id, image_url=f"https://utfs.io/f/img{i}.jpg")
        for i in range(1, count + 1)
    ]


def orders(images):
    return [img.display_order for img in images]


class TestProjects:
    """Test project records"""

    def test_ids_start_at_one(self, store, project):
        assert project.id == 1
        assert store.create_project(title="B", category="c", description="d", image="i").id == 2

    def test_featured_projects(self, store, project):
        featured = store.create_project(title="B", category="c", description="d", image="i", featured=True)
        assert store.featured_projects() == [featured]

    def test_update_project(self, store, project):
        updated = store.update_project(project.id, title="Riverside Offices II")
        assert updated.title == "Riverside Offices II"
        assert store.get_project(project.id).title == "Riverside Offices II"

    def test_update_unknown_field_raises(self, store, project):
        with pytest.raises(ValueError):
            store.update_project(project.id, colour="red")

    def test_missing_project_raises(self, store):
        with pytest.raises(NotFoundError):
            store.get_project(99)

    def test_delete_project_returns_gallery(self, store, project):
        add_images(store, project.id, 2)
        removed = store.delete_project(project.id)
        assert len(removed) == 2
        with pytest.raises(NotFoundError):
            store.get_gallery(project.id)


class TestGalleryStorage:
    """Test gallery persistence keeps display orders dense"""

    def test_images_are_appended_in_order(self, store, project):
        add_images(store, project.id, 3)
        assert orders(store.get_gallery(project.id)) == [1, 2, 3]

    def test_insert_at_position(self, store, project):
        add_images(store, project.id, 3)
        inserted = store.add_gallery_image(project.id, image_url="https://utfs.io/f/new.jpg", display_order=1)
        gallery = store.get_gallery(project.id)
        assert gallery[0].id == inserted.id
        assert inserted.display_order == 1
        assert orders(gallery) == [1, 2, 3, 4]

    def test_insert_position_is_clamped(self, store, project):
        add_images(store, project.id, 2)
        inserted = store.add_gallery_image(project.id, image_url="https://utfs.io/f/new.jpg", display_order=50)
        assert inserted.display_order == 3

    def test_add_to_missing_project_raises(self, store):
        with pytest.raises(NotFoundError):
            store.add_gallery_image(5, image_url="https://utfs.io/f/x.jpg")

    def test_update_gallery_image_moves_it(self, store, project):
        first, second, third = add_images(store, project.id, 3)
        moved = store.update_gallery_image(third.id, caption="Lobby", display_order=1)
        gallery = store.get_gallery(project.id)
        assert [img.id for img in gallery] == [third.id, first.id, second.id]
        assert moved.caption == "Lobby"
        assert orders(gallery) == [1, 2, 3]

    def test_delete_renumbers(self, store, project):
        first, second, third = add_images(store, project.id, 3)
        store.delete_gallery_image(second.id)
        gallery = store.get_gallery(project.id)
        assert [img.id for img in gallery] == [first.id, third.id]
        assert orders(gallery) == [1, 2]

    def test_apply_gallery_order(self, store, project):
        """
        Test: Persisting a client-computed order
        How: Submit orders for every image in reverse
        Ensures: The stored gallery follows the submitted order, renumbered densely
        """
        first, second, third = add_images(store, project.id, 3)
        result = store.apply_gallery_order(project.id, {first.id: 3, second.id: 2, third.id: 1})
        assert [img.id for img in result] == [third.id, second.id, first.id]
        assert orders(result) == [1, 2, 3]

    def test_apply_partial_order_keeps_unlisted_images_after(self, store, project):
        first, second, third = add_images(store, project.id, 3)
        result = store.apply_gallery_order(project.id, {third.id: 1})
        assert [img.id for img in result] == [third.id, first.id, second.id]

    def test_apply_order_with_gaps_and_duplicates(self, store, project):
        first, second, third = add_images(store, project.id, 3)
        result = store.apply_gallery_order(project.id, {first.id: 10, second.id: 4, third.id: 4})
        assert [img.id for img in result] == [second.id, third.id, first.id]
        assert orders(result) == [1, 2, 3]

    def test_apply_partial_order_with_large_value_keeps_unlisted_after(self, store, project):
        """
        Test: A partial payload whose only display order exceeds the gallery size
        How: Give the first of three images display order 10 and leave the others out
        Ensures: The listed image still comes first and the rest keep their order after it
        """
        first, second, third = add_images(store, project.id, 3)
        result = store.apply_gallery_order(project.id, {first.id: 10})
        assert [img.id for img in result] == [first.id, second.id, third.id]
        assert orders(result) == [1, 2, 3]

    def test_apply_partial_gapped_order(self, store, project):
        first, second, third, fourth = add_images(store, project.id, 4)
        result = store.apply_gallery_order(project.id, {fourth.id: 7, second.id: 3})
        assert [img.id for img in result] == [second.id, fourth.id, first.id, third.id]
        assert orders(result) == [1, 2, 3, 4]

    def test_apply_order_with_foreign_image_raises(self, store, project):
        add_images(store, project.id, 1)
        other = store.create_project(title="B", category="c", description="d", image="i")
        foreign = store.add_gallery_image(other.id, image_url="https://utfs.io/f/other.jpg")
        with pytest.raises(NotFoundError):
            store.apply_gallery_order(project.id, {foreign.id: 1})

    def test_set_feature_image_updates_project_cover(self, store, project):
        first, second = add_images(store, project.id, 2)
        store.set_feature_image(project.id, first.id)
        feature = store.set_feature_image(project.id, second.id)

        gallery = store.get_gallery(project.id)
        assert [img.is_feature for img in gallery] == [False, True]
        assert feature.id == second.id
        assert store.get_project(project.id).image == second.image_url

    def test_set_feature_image_of_other_project_raises(self, store, project):
        other = store.create_project(title="B", category="c", description="d", image="i")
        foreign = store.add_gallery_image(other.id, image_url="https://utfs.io/f/other.jpg")
        with pytest.raises(NotFoundError):
            store.set_feature_image(project.id, foreign.id)

    def test_add_as_feature(self, store, project):
        add_images(store, project.id, 2)
        image = store.add_gallery_image(project.id, image_url="https://utfs.io/f/hero.jpg", is_feature=True)
        assert image.is_feature
        assert sum(img.is_feature for img in store.get_gallery(project.id)) == 1


class TestSubmissions:
    """Test messages, testimonials, quotes and subscribers"""

    def test_messages_newest_first_and_mark_read(self, store):
        first = store.create_message(name="A", email="a@example.com", message="one")
        second = store.create_message(name="B", email="b@example.com", message="two")
        listed = store.list_messages()
        assert listed[0].created_at >= listed[1].created_at

        assert store.mark_message_read(first.id).read
        read_state = {m.id: m.read for m in store.list_messages()}
        assert read_state == {first.id: True, second.id: False}

    def test_mark_missing_message_raises(self, store):
        with pytest.raises(NotFoundError):
            store.mark_message_read(1)

    def test_testimonials_start_unapproved(self, store):
        testimonial = store.create_testimonial(name="A", position="Owner", content="Great build", rating=5)
        assert store.list_testimonials(approved=False) == [testimonial]
        assert store.list_testimonials(approved=True) == []

        store.set_testimonial_approval(testimonial.id, True)
        assert [t.id for t in store.list_testimonials(approved=True)] == [testimonial.id]

    def test_quote_status_and_review(self, store):
        quote = store.create_quote_request(name="A", email="a@example.com", service_type="Roofing", description="Replace roof")
        assert quote.status == "pending"
        assert store.update_quote_status(quote.id, "reviewing").status == "reviewing"
        assert store.mark_quote_reviewed(quote.id).reviewed

    def test_invalid_quote_status_raises(self, store):
        quote = store.create_quote_request(name="A", email="a@example.com", service_type="Roofing", description="Replace roof")
        with pytest.raises(ValueError):
            store.update_quote_status(quote.id, "lost")

    def test_quote_attachments(self, store):
        quote = store.create_quote_request(name="A", email="a@example.com", service_type="Roofing", description="Replace roof")
        attachment = store.add_quote_attachment(
            quote.id, file_name="plan.pdf", file_url="https://utfs.io/f/plan.pdf",
            file_key="plan.pdf", file_size=10, file_type="application/pdf",
        )
        assert store.get_quote_request(quote.id).attachments == [attachment]

        store.delete_quote_attachment(attachment.id)
        assert store.get_quote_request(quote.id).attachments == []
        with pytest.raises(NotFoundError):
            store.delete_quote_attachment(attachment.id)

    def test_find_subscriber_ignores_case(self, store):
        subscriber = store.create_subscriber(email="news@example.com")
        assert store.find_subscriber("NEWS@example.com ") == subscriber
        assert store.find_subscriber("other@example.com") is None

    def test_referenced_urls(self, store, project):
        image = store.add_gallery_image(project.id, image_url="https://utfs.io/f/g1.jpg")
        quote = store.create_quote_request(name="A", email="a@example.com", service_type="Roofing", description="Replace roof")
        store.add_quote_attachment(
            quote.id, file_name="plan.pdf", file_url="https://utfs.io/f/plan.pdf",
            file_key="plan.pdf", file_size=10, file_type="application/pdf",
        )
        urls = store.referenced_urls()
        assert {project.image, image.image_url, "https://utfs.io/f/plan.pdf"} <= urls

    def test_stats(self, store, project):
        add_images(store, project.id, 2)
        stats = store.get_stats()
        assert stats["projects"] == 1
        assert stats["gallery_images"] == 2


class TestProjectCover:
    """Test that the project cover follows its feature image"""

    def test_add_as_feature_updates_cover(self, store, project):
        image = store.add_gallery_image(project.id, image_url="https://utfs.io/f/hero.jpg", is_feature=True)
        assert store.get_project(project.id).image == image.image_url

    def test_add_without_feature_keeps_cover(self, store, project):
        store.add_gallery_image(project.id, image_url="https://utfs.io/f/side.jpg")
        assert store.get_project(project.id).image == project.image

    def test_deleting_feature_image_moves_cover_to_first_remaining(self, store, project):
        """
        Test: Deleting the image that is the project's cover
        How: Feature the second of two images, then delete it
        Ensures: The cover points at the remaining image and the deleted URL is no longer referenced
        """
        first, second = add_images(store, project.id, 2)
        store.set_feature_image(project.id, second.id)

        store.delete_gallery_image(second.id)

        assert store.get_project(project.id).image == first.image_url
        assert second.image_url not in store.referenced_urls()
        assert not any(img.is_feature for img in store.get_gallery(project.id))

    def test_deleting_last_feature_image_clears_cover(self, store, project):
        image = store.add_gallery_image(project.id, image_url="https://utfs.io/f/only.jpg", is_feature=True)
        store.delete_gallery_image(image.id)
        assert store.get_project(project.id).image == ""

    def test_deleting_other_image_keeps_cover(self, store, project):
        first, second = add_images(store, project.id, 2)
        store.set_feature_image(project.id, first.id)
        store.delete_gallery_image(second.id)
        assert store.get_project(project.id).image == first.image_url


class TestSyncGallery:
    """Test replacing a gallery from an edited list"""

    def test_new_gallery_promotes_first_image(self, store, project):
        images, removed = store.sync_gallery(project.id, [
            {"image_url": "https://utfs.io/f/a.jpg", "caption": "A"},
            {"image_url": "https://utfs.io/f/b.jpg"},
        ], promote_first=True)

        assert removed == []
        assert [img.is_feature for img in images] == [True, False]
        assert orders(images) == [1, 2]
        assert store.get_project(project.id).image == "https://utfs.io/f/a.jpg"

    def test_flagged_image_wins_over_promotion(self, store, project):
        images, _ = store.sync_gallery(project.id, [
            {"image_url": "https://utfs.io/f/a.jpg"},
            {"image_url": "https://utfs.io/f/b.jpg", "is_feature": True},
        ], promote_first=True)
        assert [img.is_feature for img in images] == [False, True]

    def test_only_first_flag_is_kept(self, store, project):
        images, _ = store.sync_gallery(project.id, [
            {"image_url": "https://utfs.io/f/a.jpg", "is_feature": True},
            {"image_url": "https://utfs.io/f/b.jpg", "is_feature": True},
        ])
        assert [img.is_feature for img in images] == [True, False]

    def test_matches_existing_by_id_and_url(self, store, project):
        """
        Test: Editing an existing gallery
        How: Reorder one image by id, keep one by URL, add one, drop one
        Ensures: Matched images keep their ids, the dropped one is returned
        """
        first, second, third = add_images(store, project.id, 3)
        images, removed = store.sync_gallery(project.id, [
            {"id": third.id, "image_url": third.image_url, "caption": "Moved up"},
            {"image_url": first.image_url},
            {"image_url": "https://utfs.io/f/new.jpg"},
        ])

        assert [img.id for img in images[:2]] == [third.id, first.id]
        assert images[0].caption == "Moved up"
        assert images[2].image_url == "https://utfs.io/f/new.jpg"
        assert orders(images) == [1, 2, 3]
        assert removed == [second]

    def test_items_without_url_are_skipped(self, store, project):
        images, _ = store.sync_gallery(project.id, [{"caption": "nothing uploaded"}])
        assert images == []

    def test_emptying_gallery_releases_cover(self, store, project):
        image = store.add_gallery_image(project.id, image_url="https://utfs.io/f/hero.jpg", is_feature=True)
        _, removed = store.sync_gallery(project.id, [])
        assert removed[0].id == image.id
        assert store.get_project(project.id).image == ""


class TestServiceAndBlogGalleries:
    """Test galleries owned by services and blog posts"""

    @pytest.fixture
    def service(self, store):
        return store.create_service(title="Roofing", description="Roof work", icon="hammer")

    @pytest.fixture
    def post(self, store):
        return store.create_blog_post(
            title="Spring build", slug="spring-build", content="Body", excerpt="Short",
            image="https://utfs.io/f/post.jpg", category="News", author="Sam",
        )

    def test_galleries_are_separate_per_owner(self, store, project, service):
        project_image = store.add_gallery_image(project.id, image_url="https://utfs.io/f/p.jpg")
        service_image = store.add_gallery_image(service.id, image_url="https://utfs.io/f/s.jpg", owner="service")

        assert project_image.id == service_image.id == 1
        assert [img.image_url for img in store.get_gallery(service.id, owner="service")] == ["https://utfs.io/f/s.jpg"]
        assert [img.image_url for img in store.get_gallery(project.id)] == ["https://utfs.io/f/p.jpg"]

    def test_service_gallery_reorder(self, store, service):
        first = store.add_gallery_image(service.id, image_url="https://utfs.io/f/1.jpg", owner="service")
        second = store.add_gallery_image(service.id, image_url="https://utfs.io/f/2.jpg", owner="service")
        result = store.apply_gallery_order(service.id, {second.id: 1}, owner="service")
        assert [img.id for img in result] == [second.id, first.id]

    def test_missing_service_raises(self, store):
        with pytest.raises(NotFoundError, match="Service 4 not found"):
            store.get_gallery(4, owner="service")

    def test_blog_feature_image_updates_post_cover(self, store, post):
        image = store.add_gallery_image(post.id, image_url="https://utfs.io/f/hero.jpg", owner="blog")
        store.set_feature_image(post.id, image.id, owner="blog")
        assert store.get_blog_post(post.id).image == image.image_url

    def test_duplicate_slug_rejected(self, store, post):
        with pytest.raises(DuplicateError):
            store.create_blog_post(
                title="Again", slug="spring-build", content="Body", excerpt="Short",
                image="i", category="News", author="Sam",
            )
        other = store.create_blog_post(
            title="Other", slug="other", content="Body", excerpt="Short", image="i", category="News", author="Sam",
        )
        with pytest.raises(DuplicateError):
            store.update_blog_post(other.id, slug="spring-build")
        assert store.update_blog_post(post.id, slug="spring-build").slug == "spring-build"

    def test_published_filter_and_slug_lookup(self, store, post):
        draft = store.create_blog_post(
            title="Draft", slug="draft", content="Body", excerpt="Short", image="i",
            category="News", author="Sam", published=False,
        )
        assert draft not in store.list_blog_posts(published_only=True)
        assert len(store.list_blog_posts()) == 2
        assert store.get_blog_post_by_slug("spring-build").id == post.id

    def test_delete_service_returns_gallery(self, store, service):
        store.add_gallery_image(service.id, image_url="https://utfs.io/f/1.jpg", owner="service")
        assert len(store.delete_service(service.id)) == 1


class TestCareersTeamAndSettings:
    """Test job postings, team members and site settings"""

    def make_job(self, store, **extra):
        data = dict(
            title="Site Supervisor", department="Field", location="Miami, FL", type="full-time",
            description="Run sites", responsibilities="Supervise", requirements="5 years",
        )
        data.update(extra)
        return store.create_job_posting(**data)

    def test_job_filters_and_toggles(self, store):
        job = self.make_job(store)
        hidden = self.make_job(store, active=False)

        assert [j.id for j in store.list_job_postings(active=True)] == [job.id]
        assert store.list_job_postings(active=True, featured=True) == []

        assert store.toggle_job_posting(job.id, "featured").featured is True
        assert [j.id for j in store.list_job_postings(active=True, featured=True)] == [job.id]
        assert store.toggle_job_posting(hidden.id, "active").active is True

    def test_job_toggle_rejects_other_fields(self, store):
        job = self.make_job(store)
        with pytest.raises(ValueError):
            store.toggle_job_posting(job.id, "title")

    def test_team_members_sorted_by_order(self, store):
        first = store.create_team_member(name="Ana", designation="Engineer")
        second = store.create_team_member(name="Ben", designation="Foreman")
        assert (first.order, second.order) == (1, 2)

        store.set_team_member_order(second.id, 0)
        assert [m.id for m in store.list_team_members()] == [second.id, first.id]

        store.toggle_team_member_active(second.id)
        assert [m.id for m in store.list_team_members(active_only=True)] == [first.id]

    def test_site_settings(self, store):
        phone = store.create_site_setting(key="phone", value="555-0100", category="contact")
        store.create_site_setting(key="facebook", value="https://facebook.com/acme", category="social")

        assert [s.key for s in store.list_site_settings(category="contact")] == ["phone"]
        assert store.set_site_setting_value("phone", "555-0199").value == "555-0199"
        assert store.get_site_setting("phone").id == phone.id

        with pytest.raises(DuplicateError):
            store.create_site_setting(key="phone", value="x")
        with pytest.raises(DuplicateError):
            store.update_site_setting(phone.id, key="facebook")
        with pytest.raises(NotFoundError):
            store.set_site_setting_value("fax", "1")

    def test_team_photos_are_referenced(self, store):
        store.create_team_member(name="Ana", designation="Engineer", photo="https://utfs.io/f/ana.jpg")
        assert "https://utfs.io/f/ana.jpg" in store.referenced_urls()


class TestApplications:
    """Test subcontractor and vendor applications"""

    @pytest.fixture
    def application_data(self):
        return dict(
            company_name="Acme Electric", contact_name="Jo", email="jo@example.com", phone="555-0100",
            address="1 Main St", city="Miami", state="FL", zip="33101",
            service_description="Commercial wiring", years_in_business="12", trades=["Electrical"],
        )

    def test_kinds_are_kept_apart(self, store, application_data):
        sub = store.create_application("subcontractor", **application_data)
        vendor = store.create_application("vendor", **application_data)

        assert sub.id == vendor.id == 1
        assert [a.kind for a in store.list_applications("vendor")] == ["vendor"]
        assert sub.status == "pending"

    def test_status_and_notes(self, store, application_data):
        sub = store.create_application("subcontractor", **application_data)
        assert store.update_application("subcontractor", sub.id, status="approved").status == "approved"
        assert store.update_application("subcontractor", sub.id, notes="Good refs").notes == "Good refs"
        with pytest.raises(ValueError):
            store.update_application("subcontractor", sub.id, status="maybe")

    def test_delete_and_missing(self, store, application_data):
        sub = store.create_application("subcontractor", **application_data)
        store.delete_application("subcontractor", sub.id)
        with pytest.raises(NotFoundError):
            store.get_application("subcontractor", sub.id)
