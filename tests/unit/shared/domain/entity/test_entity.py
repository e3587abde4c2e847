from rental_escrow.shared.domain import AggregateRoot, Entity


class Book(Entity[int]):
    pass


class Shelf(Entity[int]):
    pass


class Library(AggregateRoot[int]):
    pass


class TestEntity:
    def test_equality_by_id(self):
        assert Book(1) == Book(1)
        assert Book(1) != Book(2)
        assert hash(Book(1)) == hash(Book(1))

    def test_different_types_are_not_equal(self):
        assert Book(1) != Shelf(1)

    def test_repr(self):
        assert repr(Book(5)) == "Book(id=5)"


class TestAggregateRoot:
    def test_flush_domain_events(self):
        library = Library(1)
        library.add_domain_event("first")
        library.add_domain_event("second")

        assert library.flush_domain_events() == ["first", "second"]
        assert library.flush_domain_events() == []
