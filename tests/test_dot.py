from typeviz.dot import FULL_COLOR, MUTED_COLOR, edges_for, quote_id, write_dot
from typeviz.model import AliasType, EnumType, ObjectType, Property, UnionType
from typeviz.primitives import DEFAULT


def _edges(dot):
	return [line.strip() for line in dot.splitlines() if " -> " in line]


def test_self_referential_nullable_aggregation():
	user = ObjectType(
		name="User",
		properties=[
			Property(name="name", type="string"),
			Property(name="manager", type="User", nullable=True),
		],
	)
	dot = write_dot([user])
	edges = _edges(dot)
	assert len(edges) == 1
	assert edges[0].startswith('"User":"manager" -> "User" [')
	assert "arrowtail=odiamond" in edges[0]
	assert "style=dashed" in edges[0]
	assert MUTED_COLOR in edges[0]


def test_required_aggregation_is_solid():
	(edge,) = edges_for(ObjectType(name="Order", properties=[Property(name="buyer", type="User")]))
	assert "style=solid" in edge
	assert FULL_COLOR in edge


def test_object_label_rows_and_ports():
	user = ObjectType(
		name="User",
		properties=[
			Property(name="name", type="string"),
			Property(name="manager", type="User", nullable=True),
		],
	)
	dot = write_dot([user])
	assert "<b>User</b>" in dot
	assert '<td port="name" align="left"><font color="%s">name</font></td>' % FULL_COLOR in dot
	assert '<td port="manager" align="left"><font color="%s">manager</font></td>' % MUTED_COLOR in dot
	assert dot.index('port="name"') < dot.index('port="manager"')


def test_enum_has_no_edges():
	dot = write_dot([EnumType(name="Status", values=['"OPEN"', '"CLOSED"'])])
	assert _edges(dot) == []
	assert "&laquo;enum&raquo;" in dot
	assert '<td>"OPEN"</td>' in dot
	assert dot.index('"OPEN"') < dot.index('"CLOSED"')


def test_union_membership_edges():
	dot = write_dot([UnionType(name="Shape", types=["Circle", "Square"])])
	assert _edges(dot) == [
		'"Shape":"Circle" -> "Circle" [dir=forward, arrowhead=vee, style=dotted]',
		'"Shape":"Square" -> "Square" [dir=forward, arrowhead=vee, style=dotted]',
	]
	assert '<td port="Circle">Circle</td>' in dot


def test_union_skips_primitive_members_and_singularizes():
	edges = edges_for(UnionType(name="Id", types=["string", "number[]", "Key[]"]))
	assert edges == ['"Id":"Key" -> "Key" [dir=forward, arrowhead=vee, style=dotted]']


def test_array_property_targets_same_node():
	owner = ObjectType(
		name="Owner",
		properties=[Property(name="one", type="Foo"), Property(name="many", type="Foo[]")],
	)
	edges = edges_for(owner)
	assert edges[0].startswith('"Owner":"one" -> "Foo" [')
	assert edges[1].startswith('"Owner":"many" -> "Foo" [')


def test_primitive_properties_never_produce_edges():
	types = ["string", "number", "boolean", "object", "Function", "string[]", "boolean[]", "() => void"]
	owner = ObjectType(
		name="Prims",
		properties=[Property(name=f"p{i}", type=t) for i, t in enumerate(types)],
	)
	assert edges_for(owner) == []


def test_extra_primitives_suppress_edges():
	owner = ObjectType(name="Event", properties=[Property(name="at", type="Date")])
	assert len(edges_for(owner)) == 1
	assert edges_for(owner, DEFAULT.extended(["Date"])) == []


def test_inheritance_points_from_supertype():
	admin = ObjectType(name="Admin", includes=["User", "Auditable"])
	assert edges_for(admin) == [
		'"User" -> "Admin" [dir=back, arrowtail=empty]',
		'"Auditable" -> "Admin" [dir=back, arrowtail=empty]',
	]


def test_markup_is_escaped():
	holder = ObjectType(
		name="Holder",
		properties=[Property(name="lookup", type="Map<string, User & Admin>")],
	)
	alias = AliasType(name="Pair", type='Record<"a", B>')
	dot = write_dot([holder, alias])
	assert "Map&lt;string, User &amp; Admin&gt;" in dot
	assert "Record&lt;&quot;a&quot;, B&gt;" in dot
	holder_line = next(l for l in dot.splitlines() if l.strip().startswith('"Holder" [label='))
	assert "Map<string" not in holder_line
	assert '"Holder":"lookup" -> "Map<string, User & Admin>" [' in dot


def test_quote_id_escapes_quotes():
	assert quote_id('say "hi"') == '"say \\"hi\\""'
	assert quote_id("Foo") == '"Foo"'


def test_clusters_in_fixed_order():
	entities = [
		AliasType(name="Users", type="User[]"),
		UnionType(name="Shape", types=["Circle"]),
		EnumType(name="Status", values=['"A"']),
		ObjectType(name="User"),
		ObjectType(name="Group"),
	]
	dot = write_dot(entities)
	positions = [dot.index(f"subgraph cluster_{c} ") for c in ("objects", "enums", "unions", "aliases")]
	assert positions == sorted(positions)
	assert positions[0] < dot.index('"User" [label=') < dot.index('"Group" [label=') < positions[1]
	assert positions[3] < dot.index('"Users" [label=')
	assert dot.startswith("digraph G {")
	assert dot.rstrip().endswith("}")
	assert dot.count("{") == dot.count("}")


def test_duplicate_names_are_not_merged():
	dot = write_dot([ObjectType(name="User"), ObjectType(name="User")])
	assert dot.count('"User" [label=') == 2


def test_dangling_reference_is_still_emitted():
	dot = write_dot([ObjectType(name="Order", properties=[Property(name="x", type="Missing")])])
	assert '"Order":"x" -> "Missing" [' in dot
	assert '"Missing" [label=' not in dot


def test_header_and_rankdir():
	dot = write_dot([])
	assert "bgcolor=transparent" in dot
	assert "rankdir" not in dot
	assert 'rankdir="LR"' in write_dot([], rankdir="LR")


def test_union_containing_function_type_keeps_edge():
	owner = ObjectType(name="Job", properties=[Property(name="step", type="(A) | ((x) => y)")])
	(edge,) = edges_for(owner)
	assert edge.startswith('"Job":"step" -> "(A) | ((x) => y)" [')
