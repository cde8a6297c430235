import io
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch


TEST_SECRET = "test-secret-key-for-content-platform-tests"


class TestCategoryRoutes(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)
        cls.upload_root = tempfile.mkdtemp()

        from app import create_app
        from app.db import db
        from app.models.category_model import Category
        from app.services import auth_service, category_service

        cls.app = create_app({
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{cls.db_path}",
            "JWT_SECRET_KEY": TEST_SECRET,
            "UPLOAD_ROOT": cls.upload_root,
        })
        cls.client = cls.app.test_client()
        cls.db = db
        cls.Category = Category
        cls.auth_service = auth_service
        cls.category_service = category_service

    @classmethod
    def tearDownClass(cls):
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)
        shutil.rmtree(cls.upload_root, ignore_errors=True)

    def setUp(self):
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()
            self.auth_service.ensure_super_admin("root", "rootpass")

        blog_dir = os.path.join(self.upload_root, "blog")
        shutil.rmtree(blog_dir, ignore_errors=True)
        os.makedirs(blog_dir, exist_ok=True)

        response = self.client.post(
            "/api/v1/auth/login",
            json={"username": "root", "password": "rootpass"},
        )
        self.headers = {
            "Authorization": f"Bearer {response.get_json()['access_token']}"
        }

    def _create(self, name, parent_id=None):
        if parent_id is None:
            response = self.client.post(
                "/api/v1/category/add",
                json={"name": name, "description": f"{name} description"},
                headers=self.headers,
            )
        else:
            response = self.client.post(
                "/api/v1/category/sub-category",
                json={"name": name, "parent_category_id": parent_id},
                headers=self.headers,
            )
        self.assertEqual(response.status_code, 201, response.get_json())
        return response.get_json()["data"]["id"]

    def _create_blog(self, category_id, media_count):
        response = self.client.post(
            "/api/v1/blog/add",
            data={
                "title": f"blog in {category_id}",
                "content": "Body",
                "external_link": "https://example.com",
                "message_link": "https://t.me/x",
                "category_id": str(category_id),
                "medias": [
                    (io.BytesIO(b"data"), f"img{i}.jpg") for i in range(media_count)
                ],
            },
            headers=self.headers,
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 201, response.get_json())
        return response.get_json()["data"]

    def _stored_path(self, relative_path):
        return os.path.join(self.upload_root, *relative_path.split("/")[1:])

    def test_create_requires_auth(self):
        response = self.client.post("/api/v1/category/add", json={"name": "x"})
        self.assertEqual(response.status_code, 401)

    def test_create_validates_name(self):
        response = self.client.post(
            "/api/v1/category/add",
            json={"description": "no name"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("name", response.get_json()["details"])

    def test_create_subcategory_requires_existing_parent(self):
        missing = self.client.post(
            "/api/v1/category/sub-category",
            json={"name": "orphan", "parent_category_id": 404},
            headers=self.headers,
        )
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.get_json()["error"], "Parent category not found")

        no_parent = self.client.post(
            "/api/v1/category/sub-category",
            json={"name": "orphan"},
            headers=self.headers,
        )
        self.assertEqual(no_parent.status_code, 404)

    def test_find_all_returns_nested_tree(self):
        tech = self._create("Tech")
        python = self._create("Python", tech)
        self._create("Flask", python)
        self._create("Travel")

        response = self.client.get("/api/v1/category")
        self.assertEqual(response.status_code, 200)
        tree = response.get_json()["data"]

        self.assertEqual([node["name"] for node in tree], ["Tech", "Travel"])
        self.assertEqual(tree[0]["sub_categories"][0]["name"], "Python")
        self.assertEqual(
            tree[0]["sub_categories"][0]["sub_categories"][0]["name"], "Flask"
        )
        self.assertEqual(
            tree[0]["sub_categories"][0]["sub_categories"][0]["sub_categories"], []
        )
        self.assertEqual(tree[1]["sub_categories"], [])
        self.assertIsInstance(tree[0]["sub_categories"][0]["created_at"], str)

    def test_parent_and_sub_category_listings(self):
        tech = self._create("Tech")
        self._create("Python", tech)

        parents = self.client.get("/api/v1/category/parent").get_json()["data"]
        subs = self.client.get("/api/v1/category/sub-category").get_json()["data"]

        self.assertEqual([c["name"] for c in parents], ["Tech"])
        self.assertEqual([c["name"] for c in subs], ["Python"])
        self.assertEqual(subs[0]["parent_category_id"], tech)

    def test_category_detail_lists_its_blogs(self):
        tech = self._create("Tech")
        other = self._create("Other")
        self._create_blog(tech, 0)
        self._create_blog(tech, 0)
        self._create_blog(other, 0)

        response = self.client.get(f"/api/v1/category/{tech}?page=1&limit=1")
        self.assertEqual(response.status_code, 200)
        data = response.get_json()["data"]
        self.assertEqual(data["category"]["name"], "Tech")
        self.assertEqual(len(data["blogs"]), 1)
        self.assertEqual(data["total_count"], 2)

        missing = self.client.get("/api/v1/category/999")
        self.assertEqual(missing.status_code, 404)

    def test_update_merges_only_given_fields(self):
        tech = self._create("Tech")

        response = self.client.patch(
            f"/api/v1/category/{tech}",
            json={"name": "Technology"},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        data = response.get_json()["data"]
        self.assertEqual(data["name"], "Technology")
        self.assertEqual(data["description"], "Tech description")

        missing = self.client.patch(
            "/api/v1/category/999",
            json={"name": "x"},
            headers=self.headers,
        )
        self.assertEqual(missing.status_code, 404)

    def test_update_rejects_parent_cycles(self):
        tech = self._create("Tech")
        python = self._create("Python", tech)
        flask = self._create("Flask", python)

        self_parent = self.client.patch(
            f"/api/v1/category/{tech}",
            json={"parent_category_id": tech},
            headers=self.headers,
        )
        self.assertEqual(self_parent.status_code, 400)

        under_descendant = self.client.patch(
            f"/api/v1/category/{tech}",
            json={"parent_category_id": flask},
            headers=self.headers,
        )
        self.assertEqual(under_descendant.status_code, 400)

        to_root = self.client.patch(
            f"/api/v1/category/{python}",
            json={"parent_category_id": None},
            headers=self.headers,
        )
        self.assertEqual(to_root.status_code, 200)
        self.assertIsNone(to_root.get_json()["data"]["parent_category_id"])

    def test_delete_cascades_to_descendants_blogs_and_files(self):
        tech = self._create("Tech")
        python = self._create("Python", tech)
        flask = self._create("Flask", python)
        travel = self._create("Travel")

        doomed = [
            self._create_blog(tech, 1),
            self._create_blog(python, 2),
            self._create_blog(flask, 1),
        ]
        survivor = self._create_blog(travel, 1)

        response = self.client.delete(f"/api/v1/category/{tech}", headers=self.headers)

        self.assertEqual(response.status_code, 200)
        data = response.get_json()["data"]
        self.assertEqual(data["category"]["id"], tech)
        self.assertEqual(data["deleted_categories"], 3)
        self.assertEqual(data["deleted_blogs"], 3)
        self.assertEqual(data["deleted_files"], 4)
        self.assertEqual(data["orphaned_files"], [])

        for category_id in (tech, python, flask):
            self.assertEqual(
                self.client.get(f"/api/v1/category/{category_id}").status_code, 404
            )
        for blog in doomed:
            self.assertEqual(
                self.client.get(f"/api/v1/blog/{blog['id']}").status_code, 404
            )
            for media in blog["media"]:
                self.assertFalse(os.path.exists(self._stored_path(media["path"])))

        self.assertEqual(
            self.client.get(f"/api/v1/blog/{survivor['id']}").status_code, 200
        )
        self.assertTrue(
            os.path.exists(self._stored_path(survivor["media"][0]["path"]))
        )
        tree = self.client.get("/api/v1/category").get_json()["data"]
        self.assertEqual([node["name"] for node in tree], ["Travel"])

    def test_delete_reports_files_that_could_not_be_removed(self):
        tech = self._create("Tech")
        python = self._create("Python", tech)
        first = self._create_blog(tech, 2)
        second = self._create_blog(python, 1)

        stuck = first["media"][0]["path"]
        stuck_file = self._stored_path(stuck)
        real_remove = os.remove

        def remove(path):
            if path == stuck_file:
                raise OSError("device busy")
            real_remove(path)

        with patch("app.extensions.file_store.os.remove", side_effect=remove):
            response = self.client.delete(
                f"/api/v1/category/{tech}", headers=self.headers
            )

        self.assertEqual(response.status_code, 200)
        data = response.get_json()["data"]
        self.assertEqual(data["deleted_categories"], 2)
        self.assertEqual(data["deleted_blogs"], 2)
        self.assertEqual(data["deleted_files"], 2)
        self.assertEqual(data["orphaned_files"], [stuck])

        for blog in (first, second):
            self.assertEqual(
                self.client.get(f"/api/v1/blog/{blog['id']}").status_code, 404
            )
        for category_id in (tech, python):
            self.assertEqual(
                self.client.get(f"/api/v1/category/{category_id}").status_code, 404
            )

        self.assertTrue(os.path.exists(stuck_file))
        others = [first["media"][1]["path"], second["media"][0]["path"]]
        for path in others:
            self.assertFalse(os.path.exists(self._stored_path(path)))

    def test_delete_unknown_category_returns_404(self):
        response = self.client.delete("/api/v1/category/999", headers=self.headers)
        self.assertEqual(response.status_code, 404)

    def test_corrupted_cycle_does_not_recurse_forever(self):
        root = self._create("Root")
        first = self._create("First")
        second = self._create("Second", first)

        with self.app.app_context():
            looped = self.db.session.get(self.Category, first)
            looped.parent_category_id = second
            self.db.session.commit()

            tree = self.category_service.find_all()
            self.assertEqual([node["id"] for node in tree], [root])

            result = self.category_service.remove_category(first)
            self.assertEqual(result["deleted_categories"], 2)
            self.assertIsNone(self.db.session.get(self.Category, second))


if __name__ == "__main__":
    unittest.main()
